"""Initial CoreCare schema: users, vitals readings and mood entries

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-09-29 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('sex', sa.String(length=20), nullable=True),
        sa.Column('height', sa.String(length=20), nullable=True),
        sa.Column('profile_picture', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_phone', 'users', ['phone'], unique=True)

    op.create_table('heart_rate_readings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('bpm', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_heart_rate_readings_id', 'heart_rate_readings', ['id'])
    op.create_index('idx_heart_rate_user_recorded', 'heart_rate_readings', ['user_id', 'recorded_at'])

    op.create_table('blood_pressure_readings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('systolic', sa.Integer(), nullable=False),
        sa.Column('diastolic', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=40), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_blood_pressure_readings_id', 'blood_pressure_readings', ['id'])
    op.create_index('idx_blood_pressure_user_recorded', 'blood_pressure_readings', ['user_id', 'recorded_at'])

    op.create_table('bmi_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('height', sa.Float(), nullable=False),
        sa.Column('bmi', sa.Float(), nullable=False),
        sa.Column('bmi_category', sa.String(length=20), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bmi_records_id', 'bmi_records', ['id'])
    op.create_index('idx_bmi_user_recorded', 'bmi_records', ['user_id', 'recorded_at'])

    op.create_table('mood_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('mood', sa.String(length=20), nullable=False),
        sa.Column('symptoms', sa.Text(), nullable=True),
        sa.Column('heart_rate', sa.Integer(), nullable=True),
        sa.Column('context_note', sa.Text(), nullable=True),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_mood_entries_id', 'mood_entries', ['id'])
    op.create_index('idx_mood_user_recorded', 'mood_entries', ['user_id', 'recorded_at'])


def downgrade():
    op.drop_index('idx_mood_user_recorded', table_name='mood_entries')
    op.drop_index('ix_mood_entries_id', table_name='mood_entries')
    op.drop_table('mood_entries')
    op.drop_index('idx_bmi_user_recorded', table_name='bmi_records')
    op.drop_index('ix_bmi_records_id', table_name='bmi_records')
    op.drop_table('bmi_records')
    op.drop_index('idx_blood_pressure_user_recorded', table_name='blood_pressure_readings')
    op.drop_index('ix_blood_pressure_readings_id', table_name='blood_pressure_readings')
    op.drop_table('blood_pressure_readings')
    op.drop_index('idx_heart_rate_user_recorded', table_name='heart_rate_readings')
    op.drop_index('ix_heart_rate_readings_id', table_name='heart_rate_readings')
    op.drop_table('heart_rate_readings')
    op.drop_index('ix_users_phone', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
