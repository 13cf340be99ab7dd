# Overview: Flask CLI command groups for bootstrap and ledger inspection.

# backend/storeledger/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create all tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Catalog inspection:
# - python -m flask catalog list [--kind bundle]
#   List products with their sellable quantity (derived for kits).
# - python -m flask catalog low-stock
#   List simple products at or below their minimum quantity.
#
# Finance inspection:
# - python -m flask finance summary
#   Open and overdue totals for receivables and payables.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .money import format_money
from .services.finance_service import summarize
from .services.stock_service import low_stock_products
from .time_utils import utcnow


def _ledger():
    store = current_app.extensions["storeledger"]
    store.ensure_loaded()
    return store


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create every ledger table that does not exist yet."""
    db.create_all()
    click.echo("PASS Database schema ready.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    current_app.extensions["storeledger"].reload()
    click.echo("PASS Database reset complete.")


@click.group('catalog')
def catalog_group():
    """Catalog inspection commands."""


def _echo_products(store, products):
    click.echo("\n" + "="*90)
    click.echo(f"{'Name':<30} {'Kind':<8} {'Category':<16} {'Brand':<16} {'Price':>9} {'Avail':>6}")
    click.echo("="*90)
    for product in products:
        click.echo(
            f"{product.name[:30]:<30} {product.kind:<8} {product.category[:16]:<16} "
            f"{product.brand[:16]:<16} {format_money(product.sale_price):>9} "
            f"{store.get_product_stock(product.id):>6}"
        )
    click.echo("="*90 + "\n")


@catalog_group.command('list')
@click.option('--kind', type=click.Choice(['simple', 'bundle']), help='Filter by product kind')
@with_appcontext
def list_products(kind):
    """List products with their sellable quantity."""
    store = _ledger()
    products = [p for p in store.products if kind is None or p.kind == kind]

    if not products:
        click.echo("No products found.")
        return

    _echo_products(store, products)


@catalog_group.command('low-stock')
@with_appcontext
def list_low_stock():
    """List simple products at or below their minimum quantity."""
    store = _ledger()
    products = low_stock_products(store.products)

    if not products:
        click.echo("No products below minimum stock.")
        return

    _echo_products(store, products)


@click.group('finance')
def finance_group():
    """Receivable and payable inspection commands."""


@finance_group.command('summary')
@with_appcontext
def finance_summary():
    """Open and overdue totals for receivables and payables."""
    store = _ledger()
    totals = summarize(store.receivables, store.payables, utcnow().date())

    click.echo(f"Receivables open:    {format_money(totals['receivable_open']):>12}")
    click.echo(f"Receivables overdue: {format_money(totals['receivable_overdue']):>12}")
    click.echo(f"Payables open:       {format_money(totals['payable_open']):>12}")
    click.echo(f"Payables overdue:    {format_money(totals['payable_overdue']):>12}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(catalog_group)
    app.cli.add_command(finance_group)
