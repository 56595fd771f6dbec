"""Initial schema: menu, events, games, reservations, site content, users

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001_initial_schema'
down_revision = None


def upgrade():
    op.create_table(
        'menu_categories',
        sa.Column('id', sa.String(100), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
    )
    op.create_index('ix_menu_categories_slug', 'menu_categories', ['slug'], unique=True)
    op.create_index('ix_menu_categories_display_order', 'menu_categories', ['display_order'])

    op.create_table(
        'menu_items',
        sa.Column('id', sa.String(100), primary_key=True),
        sa.Column('category_id', sa.String(), sa.ForeignKey('menu_categories.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.String(2000), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('badges', sa.JSON(), nullable=False),
        sa.Column('allergens', sa.JSON(), nullable=False),
        sa.Column('published', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_menu_items_category_id', 'menu_items', ['category_id'])

    op.create_table(
        'events',
        sa.Column('id', sa.String(100), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
    )
    op.create_index('ix_events_slug', 'events', ['slug'], unique=True)
    op.create_index('ix_events_start_date', 'events', ['start_date'])

    op.create_table(
        'games',
        sa.Column('id', sa.String(100), primary_key=True),
        sa.Column('league', sa.String(50), nullable=False),
        sa.Column('home_team', sa.String(255), nullable=False),
        sa.Column('away_team', sa.String(255), nullable=False),
        sa.Column('home_abbr', sa.String(10), nullable=False),
        sa.Column('away_abbr', sa.String(10), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('channel', sa.String(100), nullable=True),
    )
    op.create_index('ix_games_start_time', 'games', ['start_time'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('scheduled_for', sa.DateTime(), nullable=False),
        sa.Column('special_requests', sa.String(2000), nullable=True),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'CONFIRMED', 'CANCELLED', name='reservationstatus'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_reservations_scheduled_for', 'reservations', ['scheduled_for'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])
    op.create_index('ix_reservations_created_at', 'reservations', ['created_at'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Singleton content rows, keyed 'main'
    op.create_table(
        'site_settings',
        sa.Column('id', sa.String(20), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hours', sa.JSON(), nullable=False),
        sa.Column('socials', sa.JSON(), nullable=False),
        sa.Column('hero', sa.JSON(), nullable=False),
        sa.Column('footer', sa.JSON(), nullable=False),
    )
    op.create_table(
        'promotions',
        sa.Column('id', sa.String(20), primary_key=True),
        sa.Column('landing', sa.JSON(), nullable=False),
        sa.Column('side_banner', sa.JSON(), nullable=False),
        sa.Column('happy_hour', sa.JSON(), nullable=False),
    )
    op.create_table(
        'landing_content',
        sa.Column('id', sa.String(20), primary_key=True),
        sa.Column('popup', sa.JSON(), nullable=False),
        sa.Column('hero', sa.JSON(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('special_offer', sa.JSON(), nullable=False),
    )

    op.create_table(
        'migration_state',
        sa.Column('kind', sa.String(50), primary_key=True),
        sa.Column('inserted', sa.Integer(), nullable=False),
        sa.Column('skipped', sa.Integer(), nullable=False),
        sa.Column('failed', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
    )


def downgrade():
    op.drop_table('migration_state')
    op.drop_table('landing_content')
    op.drop_table('promotions')
    op.drop_table('site_settings')
    op.drop_index('ix_users_email', 'users')
    op.drop_index('ix_users_username', 'users')
    op.drop_table('users')
    op.drop_table('reservations')
    op.drop_table('games')
    op.drop_table('events')
    op.drop_table('menu_items')
    op.drop_table('menu_categories')
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE IF EXISTS reservationstatus')
