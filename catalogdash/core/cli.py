"""
Management commands registered on the Flask CLI:

    flask init-db                    Create the collection indexes
    flask seed [--products N]        Reset users/products to demo data
    flask create-admin EMAIL NAME    Add an account without touching other data
    flask cleanup-logs [--days N]    Prune the app_logs collection
"""

import random

import click
from flask.cli import with_appcontext

from .database import Database, utcnow
from .logging_service import LoggingService
from .validations import ROLES

SEED_PASSWORD = 'admin123'
SEED_USERS = (
    ('Super Admin', 'admin@demo.com', 'superadmin'),
    ('Demo Admin', 'demo@demo.com', 'admin'),
)
SEED_CATEGORIES = ('Electronics', 'Clothing', 'Home & Garden', 'Sports', 'Books')
SEED_STATUSES = ('active', 'active', 'active', 'inactive', 'draft')


def sample_product(index, rng=random):
    """Demo product number `index` (1-based) with two placeholder images"""
    category = SEED_CATEGORIES[(index - 1) % len(SEED_CATEGORIES)]
    now = utcnow()
    return {
        'name': f"{category} Item {index}",
        'description': f"Sample {category.lower()} product number {index} for the demo catalog.",
        'category': category,
        'price': round(rng.randint(10, 509) + rng.random(), 2),
        'stock': rng.randint(0, 99),
        'sales': rng.randint(0, 199),
        'sku': f"PROD-{index:04d}",
        'status': rng.choice(SEED_STATUSES),
        'images': [
            {'url': f"https://picsum.photos/seed/{index}/400/400", 'publicId': f"seed-{index}"},
            {'url': f"https://picsum.photos/seed/{index + 100}/400/400", 'publicId': f"seed-{index + 100}"},
        ],
        'createdAt': now,
        'updatedAt': now,
    }


def seed_database(product_count=25, rng=random):
    """Wipe users and products, then insert the demo accounts and products"""
    from ..modules.auth.database import UserDatabase

    Database.users().delete_many({})
    Database.products().delete_many({})

    for name, email, role in SEED_USERS:
        UserDatabase.create_user(name, email, SEED_PASSWORD, role)

    products = [sample_product(i, rng) for i in range(1, product_count + 1)]
    if products:
        Database.products().insert_many(products)

    LoggingService.info('cli', f"Seeded {len(SEED_USERS)} users and {len(products)} products")
    return len(SEED_USERS), len(products)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the indexes used by the API."""
    created = Database.ensure_indexes()
    click.echo(f"Ensured {created} indexes")


@click.command('seed')
@click.option('--products', 'product_count', default=25, show_default=True, type=click.IntRange(min=0),
              help='Number of sample products to create.')
@with_appcontext
def seed_command(product_count):
    """Reset the users and products collections to demo data."""
    Database.ensure_indexes()
    users, products = seed_database(product_count)
    click.echo(f"Created {users} users and {products} products")
    click.echo(f"Login with {SEED_USERS[0][1]} / {SEED_PASSWORD}")


@click.command('create-admin')
@click.argument('email')
@click.argument('name')
@click.option('--role', type=click.Choice(ROLES), default='admin', show_default=True)
@click.password_option()
@with_appcontext
def create_admin_command(email, name, role, password):
    """Create an admin account."""
    from ..modules.auth.database import UserDatabase

    if UserDatabase.get_user_by_email(email):
        raise click.ClickException(f"User with email {email} already exists")
    if len(password) < 6:
        raise click.BadParameter('Password must be at least 6 characters', param_hint='password')

    user = UserDatabase.create_user(name, email, password, role)
    LoggingService.info('cli', f"Created {role} {user['email']}")
    click.echo(f"Created {role} {user['email']}")


@click.command('cleanup-logs')
@click.option('--days', default=30, show_default=True, type=click.IntRange(min=0),
              help='Keep log entries newer than this many days.')
@with_appcontext
def cleanup_logs_command(days):
    """Delete old entries from the app_logs collection."""
    deleted = LoggingService.cleanup_old_logs(days)
    click.echo(f"Deleted {deleted} log entries")


def init_cli(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(cleanup_logs_command)
    app.cli.add_command(seed_command)
    app.cli.add_command(create_admin_command)
