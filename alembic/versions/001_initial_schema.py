"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-05-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.CHAR(36), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('github_id', sa.String(64), nullable=False),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.String(1024), nullable=True),
        sa.Column('access_token', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('github_id')
    )
    op.create_index('ix_users_github_id', 'users', ['github_id'])

    # Create repositories table
    op.create_table(
        'repositories',
        sa.Column('id', sa.CHAR(36), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('github_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(512), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(1024), nullable=False),
        sa.Column('owner_id', sa.CHAR(36), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('owner_id', 'github_id', name='uq_repository_owner_github_id')
    )
    op.create_index('ix_repositories_owner_id', 'repositories', ['owner_id'])

    # Create commits table
    op.create_table(
        'commits',
        sa.Column('id', sa.CHAR(36), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=False),
        sa.Column('sha', sa.String(64), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('author_name', sa.String(255), nullable=True),
        sa.Column('author_email', sa.String(255), nullable=True),
        sa.Column('date', sa.TIMESTAMP(), nullable=True),
        sa.Column('repository_id', sa.CHAR(36), nullable=False),
        sa.Column('article_content', sa.Text(), nullable=True),
        sa.Column('article_generated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['repository_id'], ['repositories.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('repository_id', 'sha', name='uq_commit_repository_sha')
    )
    op.create_index('ix_commits_repository_id', 'commits', ['repository_id'])


def downgrade() -> None:
    op.drop_index('ix_commits_repository_id', table_name='commits')
    op.drop_table('commits')
    op.drop_index('ix_repositories_owner_id', table_name='repositories')
    op.drop_table('repositories')
    op.drop_index('ix_users_github_id', table_name='users')
    op.drop_table('users')
