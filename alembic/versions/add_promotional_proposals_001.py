"""Add promotional proposal tables

This migration adds:
1. users, businesses, creators, workspaces (identity tables the flow references)
2. workspace_links table
3. promotional_link_proposals table
4. promotional_link_metrics table
5. campaigns table

Revision ID: add_promotional_proposals_001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'add_promotional_proposals_001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # 1. Identity tables
    op.create_table('users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(255)),
        sa.Column('user_type', sa.Enum('business', 'creator', 'admin', name='usertype'), server_default='creator'),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )

    op.create_table('businesses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('industry', sa.String(255)),
        sa.Column('website', sa.String(500)),
        sa.Column('budget_cents', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint('budget_cents >= 0', name='ck_business_budget_non_negative'),
    )

    op.create_table('creators',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('bio', sa.Text),
        sa.Column('categories', sa.JSON),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )

    op.create_table('workspaces',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('creator_id', sa.String(36), sa.ForeignKey('creators.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('avatar_url', sa.String(500)),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )

    # 2. Workspace links
    op.create_table('workspace_links',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('workspace_id', sa.String(36), sa.ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.Enum('standard', 'promotional', name='workspacelinktypedb'), nullable=False, server_default='standard'),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('url', sa.String(2048), nullable=False),
        sa.Column('icon', sa.String(50)),
        sa.Column('background_color', sa.String(20)),
        sa.Column('text_color', sa.String(20)),
        sa.Column('order', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, server_default=sa.true()),
        sa.Column('config', sa.JSON),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index('workspace_links_workspace_id_idx', 'workspace_links', ['workspace_id'])
    op.create_index('workspace_links_order_idx', 'workspace_links', ['order'])

    # 3. Proposals
    op.create_table('promotional_link_proposals',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('creator_id', sa.String(36), sa.ForeignKey('creators.id', ondelete='CASCADE'), nullable=False),
        sa.Column('workspace_id', sa.String(36), sa.ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('url', sa.String(2048), nullable=False),
        sa.Column('start_date', sa.DateTime, nullable=False),
        sa.Column('end_date', sa.DateTime, nullable=False),
        sa.Column('price_cents', sa.Integer, nullable=False),
        sa.Column('status', sa.Enum('pending', 'accepted', 'rejected', 'expired', name='proposalstatusdb'), nullable=False, server_default='pending'),
        sa.Column('workspace_link_id', sa.String(36), sa.ForeignKey('workspace_links.id', ondelete='SET NULL'), unique=True, nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint('price_cents >= 0', name='ck_proposal_price_non_negative'),
        sa.CheckConstraint('end_date >= start_date', name='ck_proposal_date_range'),
        sa.CheckConstraint("(status = 'accepted') = (workspace_link_id IS NOT NULL)", name='ck_proposal_link_iff_accepted'),
    )
    op.create_index('proposals_business_id_idx', 'promotional_link_proposals', ['business_id'])
    op.create_index('proposals_workspace_id_idx', 'promotional_link_proposals', ['workspace_id'])

    # 4. Metrics
    op.create_table('promotional_link_metrics',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('workspace_link_id', sa.String(36), sa.ForeignKey('workspace_links.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('clicks', sa.Integer, nullable=False, server_default='0'),
        sa.Column('conversions', sa.Integer, nullable=False, server_default='0'),
        sa.Column('revenue_cents', sa.Integer, nullable=False, server_default='0'),
        sa.Column('impressions', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )

    # 5. Campaigns
    op.create_table('campaigns',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('creator_id', sa.String(36), sa.ForeignKey('creators.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('start_date', sa.DateTime),
        sa.Column('end_date', sa.DateTime),
        sa.Column('status', sa.Enum('draft', 'active', 'completed', name='campaignstatusdb'), nullable=False, server_default='draft'),
        sa.Column('metrics', sa.JSON),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index('campaigns_business_id_idx', 'campaigns', ['business_id'])


def downgrade():
    op.drop_index('campaigns_business_id_idx', table_name='campaigns')
    op.drop_table('campaigns')
    op.drop_table('promotional_link_metrics')
    op.drop_index('proposals_workspace_id_idx', table_name='promotional_link_proposals')
    op.drop_index('proposals_business_id_idx', table_name='promotional_link_proposals')
    op.drop_table('promotional_link_proposals')
    op.drop_index('workspace_links_order_idx', table_name='workspace_links')
    op.drop_index('workspace_links_workspace_id_idx', table_name='workspace_links')
    op.drop_table('workspace_links')
    op.drop_table('workspaces')
    op.drop_table('creators')
    op.drop_table('businesses')
    op.drop_table('users')

    for enum_name in ('campaignstatusdb', 'proposalstatusdb', 'workspacelinktypedb', 'usertype'):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
