"""Initial schema: doctors, appointments, prescriptions, medical_files

Revision ID: 3c9e1f7a2b10
Revises:
Create Date: 2026-10-18 09:30:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9e1f7a2b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'doctors',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('specialty', sa.String(length=100), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('price_per_hour', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('languages', sa.String(length=255), nullable=True),
    )
    with op.batch_alter_table('doctors', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_doctors_specialty'), ['specialty'], unique=False)
        batch_op.create_index(batch_op.f('ix_doctors_location'), ['location'], unique=False)
        batch_op.create_index(batch_op.f('ix_doctors_rating'), ['rating'], unique=False)

    op.create_table(
        'appointments',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('doctor_id', sa.String(length=36), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('patient_name', sa.String(length=255), nullable=False),
        sa.Column('patient_email', sa.String(length=255), nullable=False),
        sa.Column('date_time', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='confirmed'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_appointments_doctor_id'), ['doctor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_date_time'), ['date_time'], unique=False)

    op.create_table(
        'prescriptions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('appointment_id', sa.String(length=36), sa.ForeignKey('appointments.id'), nullable=False),
        sa.Column('doctor_id', sa.String(length=36), nullable=False),
        sa.Column('patient_name', sa.String(length=255), nullable=False),
        sa.Column('medications', sa.Text(), nullable=False),
        sa.Column('dosage', sa.String(length=255), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('prescriptions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_prescriptions_appointment_id'), ['appointment_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_prescriptions_doctor_id'), ['doctor_id'], unique=False)

    op.create_table(
        'medical_files',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('patient_id', sa.String(length=100), nullable=False),
        sa.Column('patient_name', sa.String(length=255), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_type', sa.String(length=120), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('s3_key', sa.String(length=500), nullable=False, unique=True),
        sa.Column('category', sa.String(length=30), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('medical_files', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_medical_files_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_medical_files_category'), ['category'], unique=False)
        batch_op.create_index(batch_op.f('ix_medical_files_uploaded_at'), ['uploaded_at'], unique=False)


def downgrade():
    with op.batch_alter_table('medical_files', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_medical_files_uploaded_at'))
        batch_op.drop_index(batch_op.f('ix_medical_files_category'))
        batch_op.drop_index(batch_op.f('ix_medical_files_patient_id'))
    op.drop_table('medical_files')

    with op.batch_alter_table('prescriptions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_prescriptions_doctor_id'))
        batch_op.drop_index(batch_op.f('ix_prescriptions_appointment_id'))
    op.drop_table('prescriptions')

    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_appointments_date_time'))
        batch_op.drop_index(batch_op.f('ix_appointments_doctor_id'))
    op.drop_table('appointments')

    with op.batch_alter_table('doctors', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_doctors_rating'))
        batch_op.drop_index(batch_op.f('ix_doctors_location'))
        batch_op.drop_index(batch_op.f('ix_doctors_specialty'))
    op.drop_table('doctors')
