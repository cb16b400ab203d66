"""Create posts table

Revision ID: posts_001
Revises: 
Create Date: 2026-02-03 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'posts_001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Si init_db ya creó la tabla al arrancar la app, no hay nada que hacer
    bind = op.get_bind()
    if 'posts' in sa.inspect(bind).get_table_names():
        return

    op.create_table('posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), server_default='', nullable=False),
        sa.Column('thumbnail', sa.Text(), nullable=True),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_posts_id'), 'posts', ['id'], unique=False)
    op.create_index('ix_posts_created_at', 'posts', ['created_at'], unique=False)


def downgrade():
    op.drop_index('ix_posts_created_at', table_name='posts')
    op.drop_index(op.f('ix_posts_id'), table_name='posts')
    op.drop_table('posts')
