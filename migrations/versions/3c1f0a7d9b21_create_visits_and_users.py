"""Create visits and users tables

Revision ID: 3c1f0a7d9b21
Revises:
Create Date: 2026-10-19 10:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f0a7d9b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create visits and users tables matching the models."""
    op.create_table(
        'visits',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=10), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('condition', sa.Text(), nullable=True),
        sa.Column('treatment', sa.Text(), nullable=True),
        sa.Column('diabetes', sa.String(length=30), nullable=True),
        sa.Column('visit_date', sa.DateTime(), nullable=False),
        sa.Column('follow_up_date', sa.DateTime(), nullable=True),
        sa.Column('amount_paid', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('name', 'phone', 'visit_date', name='uq_visits_name_phone_visit_date'),
        sa.CheckConstraint('age >= 0 AND age <= 150', name='ck_visits_age_range'),
        sa.CheckConstraint('amount_paid >= 0', name='ck_visits_amount_paid_non_negative'),
        sa.CheckConstraint("gender IN ('Male', 'Female', 'Other')", name='ck_visits_gender'),
        sa.CheckConstraint(
            "diabetes IN ('No Diabetes', 'Type 1 Diabetes', 'Type 2 Diabetes', "
            "'Gestational Diabetes', 'Prediabetes')",
            name='ck_visits_diabetes',
        ),
    )

    with op.batch_alter_table('visits', schema=None) as batch_op:
        batch_op.create_index('ix_visits_name_phone', ['name', 'phone'], unique=False)
        batch_op.create_index(batch_op.f('ix_visits_visit_date'), ['visit_date'], unique=False)
        batch_op.create_index(batch_op.f('ix_visits_follow_up_date'), ['follow_up_date'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=80), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_username'), ['username'], unique=True)


def downgrade():
    """Drop visits and users tables."""
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_username'))

    op.drop_table('users')

    with op.batch_alter_table('visits', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_visits_follow_up_date'))
        batch_op.drop_index(batch_op.f('ix_visits_visit_date'))
        batch_op.drop_index('ix_visits_name_phone')

    op.drop_table('visits')
