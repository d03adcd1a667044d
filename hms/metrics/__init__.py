"""
Dashboard metrics: patient totals, today's appointments, pending billing and bed occupancy.
"""
