"""Create hospital tables

Revision ID: 3b8e1f2c9a7d
Revises:
Create Date: 2025-10-12 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b8e1f2c9a7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _patient_fk():
    return sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='CASCADE')


def upgrade() -> None:
    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('dob', sa.Date(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('insurance', sa.String(length=255), nullable=True),
        sa.Column('insurance_provider', sa.String(length=255), nullable=True),
        sa.Column('insurance_policy', sa.String(length=255), nullable=True),
        sa.Column('family_history', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_patients_id'), 'patients', ['id'], unique=False)
    op.create_index(op.f('ix_patients_email'), 'patients', ['email'], unique=False)

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patientName', sa.String(length=255), nullable=False),
        sa.Column('doctorName', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_appointments_id'), 'appointments', ['id'], unique=False)
    op.create_index(op.f('ix_appointments_patientName'), 'appointments', ['patientName'], unique=False)
    op.create_index(op.f('ix_appointments_date'), 'appointments', ['date'], unique=False)

    op.create_table(
        'lab_imaging',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('test_type', sa.String(length=255), nullable=False),
        sa.Column('test_date', sa.Date(), nullable=False),
        sa.Column('result', sa.Text(), nullable=True),
        sa.Column('technician_name', sa.String(length=255), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_lab_imaging_id'), 'lab_imaging', ['id'], unique=False)
    op.create_index(op.f('ix_lab_imaging_patient_id'), 'lab_imaging', ['patient_id'], unique=False)

    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=100), nullable=True),
        sa.Column('frequency', sa.String(length=100), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_medications_id'), 'medications', ['id'], unique=False)
    op.create_index(op.f('ix_medications_patient_id'), 'medications', ['patient_id'], unique=False)

    op.create_table(
        'emr_notes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('visit_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('doctor_id', sa.String(length=50), nullable=False),
        sa.Column('doctor_name', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_emr_notes_id'), 'emr_notes', ['id'], unique=False)
    op.create_index(op.f('ix_emr_notes_patient_id'), 'emr_notes', ['patient_id'], unique=False)

    op.create_table(
        'emr_diagnoses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('emr_note_id', sa.Integer(), nullable=True),
        sa.Column('diagnosis_code', sa.String(length=20), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('severity', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        _patient_fk(),
        sa.ForeignKeyConstraint(['emr_note_id'], ['emr_notes.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_emr_diagnoses_id'), 'emr_diagnoses', ['id'], unique=False)
    op.create_index(op.f('ix_emr_diagnoses_patient_id'), 'emr_diagnoses', ['patient_id'], unique=False)

    op.create_table(
        'emr_prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('emr_note_id', sa.Integer(), nullable=True),
        sa.Column('medication_name', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=100), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        _patient_fk(),
        sa.ForeignKeyConstraint(['emr_note_id'], ['emr_notes.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_emr_prescriptions_id'), 'emr_prescriptions', ['id'], unique=False)
    op.create_index(op.f('ix_emr_prescriptions_patient_id'), 'emr_prescriptions', ['patient_id'], unique=False)

    op.create_table(
        'emr_allergies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('allergen', sa.String(length=255), nullable=False),
        sa.Column('reaction', sa.String(length=255), nullable=True),
        sa.Column('severity', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_emr_allergies_id'), 'emr_allergies', ['id'], unique=False)
    op.create_index(op.f('ix_emr_allergies_patient_id'), 'emr_allergies', ['patient_id'], unique=False)

    op.create_table(
        'telemedicine_appointments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('specialty', sa.String(length=255), nullable=False),
        sa.Column('date_time', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_telemedicine_appointments_id'), 'telemedicine_appointments', ['id'], unique=False)
    op.create_index(op.f('ix_telemedicine_appointments_patient_id'), 'telemedicine_appointments', ['patient_id'], unique=False)

    op.create_table(
        'telemedicine_prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('medication', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=100), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_telemedicine_prescriptions_id'), 'telemedicine_prescriptions', ['id'], unique=False)
    op.create_index(op.f('ix_telemedicine_prescriptions_patient_id'), 'telemedicine_prescriptions', ['patient_id'], unique=False)

    op.create_table(
        'telemedicine_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('sender', sa.String(length=100), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        _patient_fk(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_telemedicine_messages_id'), 'telemedicine_messages', ['id'], unique=False)
    op.create_index(op.f('ix_telemedicine_messages_patient_id'), 'telemedicine_messages', ['patient_id'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('reset_token', sa.String(length=64), nullable=True),
        sa.Column('reset_expires', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_reset_token'), 'users', ['reset_token'], unique=False)

    op.create_table(
        'billing',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=True),
        sa.Column('amount_due', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_billing_id'), 'billing', ['id'], unique=False)

    op.create_table(
        'beds_status',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('occupied_beds', sa.Integer(), nullable=False),
        sa.Column('total_beds', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_beds_status_id'), 'beds_status', ['id'], unique=False)


def downgrade() -> None:
    # Children first so foreign keys never dangle
    for table in (
        'beds_status',
        'billing',
        'users',
        'telemedicine_messages',
        'telemedicine_prescriptions',
        'telemedicine_appointments',
        'emr_allergies',
        'emr_prescriptions',
        'emr_diagnoses',
        'emr_notes',
        'medications',
        'lab_imaging',
        'appointments',
        'patients',
    ):
        op.drop_table(table)
