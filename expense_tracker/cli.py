# expense_tracker/cli.py
import logging
import os
from datetime import datetime

import click
from dotenv import load_dotenv

from expense_tracker.config import load_config
from expense_tracker.notifications import ClickNotifier
from expense_tracker.outputs import get_output
from expense_tracker.tracker import ExpenseTracker
from expense_tracker.utils import filter_transactions_by_month, format_currency, format_date
from expense_tracker.views import (
    EMPTY_CHART_MESSAGE,
    EMPTY_TRANSACTIONS_MESSAGE,
    chart_label,
    chart_slices,
    summary_view,
)


@click.group()
@click.option(
    '--config', 'config_path',
    default='config.yaml',
    type=click.Path(dir_okay=False),
    help='Path to config.yaml (defaults are used when it does not exist)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with EXPENSE_TRACKER_* overrides'
)
@click.option(
    '--data-file', 'data_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='JSON file holding the ledger (overrides config if provided)'
)
@click.pass_context
def main(ctx, config_path, env_file, data_file):
    """
    Record income and expenses, and review the balance, the transaction
    list and where the money goes by category.
    """
    if env_file:
        load_dotenv(env_file)

    cfg = load_config(config_path)
    if data_file:
        cfg['data_file'] = data_file
    logging.basicConfig(level=os.getenv('EXPENSE_TRACKER_LOG_LEVEL', cfg['log_level']).upper())

    notifier = ClickNotifier()
    ctx.obj = {
        'config': cfg,
        'notifier': notifier,
        'tracker': ExpenseTracker.from_config(cfg, notifier),
    }


@main.command()
@click.argument('amount')
@click.argument('description')
@click.option('--category', '-c', default='', help='Expense category (ignored for income)')
@click.option('--type', '-t', 'tx_type', default='', help='income or expense')
@click.pass_obj
def add(obj, amount, description, category, tx_type):
    """Add a transaction."""
    tx = obj['tracker'].submit(amount, description, category, tx_type)
    if tx is None or obj['notifier'].errors:
        raise SystemExit(1)
    click.echo(f"#{tx.id} {format_date(tx.date)} {tx.category} "
               f"{format_currency(tx.amount, obj['config']['currency'])}")


@main.command()
@click.argument('tx_id')
@click.pass_obj
def delete(obj, tx_id):
    """Delete a transaction by id."""
    removed = obj['tracker'].delete(tx_id)
    if not removed or obj['notifier'].errors:
        raise SystemExit(1)


def _validate_month(ctx, param, value):
    if value is None:
        return None
    try:
        return datetime.strptime(value, '%Y-%m').strftime('%Y-%m')
    except ValueError:
        raise click.BadParameter('expected YYYY-MM, e.g. 2026-10')


@main.command('list')
@click.option('--month', default=None, callback=_validate_month,
              help='Only show transactions from YYYY-MM')
@click.pass_obj
def list_transactions(obj, month):
    """List transactions, newest first."""
    ledger = obj['tracker'].ledger
    currency = obj['config']['currency']
    txs = ledger.sorted_for_display()
    if month:
        txs = filter_transactions_by_month(txs, month)
    if not txs:
        click.echo(EMPTY_TRANSACTIONS_MESSAGE)
        return
    for tx in txs:
        sign = '+' if tx.is_income else '-'
        click.echo(
            f"#{tx.id:<4} {format_date(tx.date):<13} {tx.category:<15} "
            f"{sign}{format_currency(tx.amount, currency):>14}  {tx.description}"
        )


@main.command()
@click.pass_obj
def summary(obj):
    """Show total income, total expenses and balance."""
    view = summary_view(obj['tracker'].ledger.summarize(), obj['config']['currency'])
    click.echo(f"Income:   {view['total_income']}")
    click.echo(f"Expenses: {view['total_expenses']}")
    click.echo(f"Balance:  {view['balance']}")


@main.command()
@click.pass_obj
def breakdown(obj):
    """Show expenses grouped by category."""
    slices = chart_slices(obj['tracker'].ledger.category_breakdown())
    if not slices:
        click.echo(EMPTY_CHART_MESSAGE)
        return
    for s in slices:
        click.echo(chart_label(s, obj['config']['currency']))


@main.command()
@click.option(
    '--format', 'output_format',
    default='csv',
    type=click.Choice(['csv', 'html', 'excel']),
    help='Report format: csv, html, or excel'
)
@click.option('--output-dir', default=None, type=click.Path(file_okay=False),
              help='Directory for the report (overrides config)')
@click.pass_obj
def export(obj, output_format, output_dir):
    """Write a report of the ledger."""
    cfg = dict(obj['config'])
    if output_dir:
        cfg['output_dir'] = output_dir
    outputter = get_output(output_format, cfg)
    out_path = outputter.write(obj['tracker'].ledger)
    click.echo(f"Written {len(obj['tracker'].ledger)} transaction(s) to {out_path}")


@main.command()
@click.pass_obj
def seed(obj):
    """Add the demo transactions to an empty ledger."""
    added = obj['tracker'].seed_sample_data()
    if not added:
        click.echo("Ledger is not empty; nothing seeded.")
        return
    click.echo(f"Seeded {added} sample transaction(s).")


@main.command()
@click.option('--host', default='127.0.0.1', help='Host to bind')
@click.option('--port', default=8000, type=int, help='Port to bind')
@click.pass_obj
def serve(obj, host, port):
    """Run the web dashboard."""
    from expense_tracker.web import serve as run_server

    run_server(obj['tracker'], obj['config'], host, port)
