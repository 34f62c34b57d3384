#!/usr/bin/env python3
"""
Main CLI Entry Point for the SMS Ledger

Command-line interface for ingesting exported bank SMS, reconciling
credit-card bills with payments, and inspecting how a message is classified.
"""

import logging
import os
from datetime import datetime
from pathlib import Path

import click

from ..core.config import get_config, reload_config
from ..core.dates import FinancialTimestamp
from ..core.errors import StoreError
from ..core.json_utils import format_json
from ..core.models import RawMessage
from ..ingestion import (
    correct_transaction_fields,
    ingest_messages,
    open_message_source,
    process_message,
    sync_credit_card_messages,
)
from ..ingestion.orchestrator import classify_message
from ..parsing import parse_credit_card_bill, parse_credit_card_payment
from ..reconciliation import BillPaymentMatcher, summarize_bills
from ..storage import JsonRecordStore


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    SMS Ledger - Bank SMS to financial records

    Extracts transactions, credit-card bills and payments from bank SMS,
    suppresses duplicates, and matches payments to the bills they settle.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["SMSLEDGER_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    config = reload_config() if (config_env or debug) else get_config()

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("smsledger").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


def _open_store(ctx: click.Context, store_path: str | None) -> JsonRecordStore:
    """Open the record store named on the command line, or the configured one."""
    path = Path(store_path) if store_path else ctx.obj["config"].storage.store_file
    try:
        return JsonRecordStore(path)
    except StoreError as e:
        raise click.ClickException(str(e)) from e


@main.command()
def version() -> None:
    """Show version information."""
    from smsledger import __author__, __version__

    click.echo(f"SMS Ledger v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Store File: {config_obj.storage.store_file}")
    click.echo(f"  Max Messages: {config_obj.ingestion.max_messages}")
    click.echo(f"  Card Senders: {', '.join(config_obj.ingestion.card_sender_keywords)}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.argument("messages_file", type=click.Path(dir_okay=False))
@click.option("--store", "store_path", help="Record store JSON file (default: configured store)")
@click.option("--max-messages", type=int, help="Maximum messages to read (default: configured limit)")
@click.option("--cards/--no-cards", default=True, help="Also extract credit-card bills and payments")
@click.option("--match/--no-match", "run_matcher", default=True, help="Match payments to bills after the card sync")
@click.pass_context
def ingest(
    ctx: click.Context,
    messages_file: str,
    store_path: str | None,
    max_messages: int | None,
    cards: bool,
    run_matcher: bool,
) -> None:
    """
    Ingest an exported SMS inbox (JSON or CSV).

    Examples:
      smsledger ingest inbox.json
      smsledger ingest inbox.csv --store ledger.json --no-match
    """
    config = ctx.obj["config"]
    limit = max_messages if max_messages is not None else config.ingestion.max_messages
    store = _open_store(ctx, store_path)
    source = open_message_source(messages_file, max_messages=limit)

    if ctx.obj.get("verbose", False):
        click.echo(f"Reading messages from {messages_file}")
        click.echo(f"Record store: {store.store_file}")

    stats = ingest_messages(source, store)
    if not stats.success:
        raise click.ClickException(f"Ingestion failed: {stats.error}")

    click.echo("Transactions:")
    click.echo(f"  Messages seen: {stats.total_seen}")
    click.echo(f"  Inserted: {stats.inserted}")
    click.echo(f"  Duplicates: {stats.duplicates}")
    click.echo(f"  Failed: {stats.failed}")
    click.echo(f"  Average confidence: {stats.average_confidence:.2f}")
    for category, count in sorted(stats.per_category_counts.items()):
        click.echo(f"    {category}: {count}")

    if not cards:
        return

    card_stats = sync_credit_card_messages(
        source,
        store,
        run_matcher=run_matcher,
        sender_keywords=config.ingestion.card_sender_keywords,
    )
    if not card_stats.success:
        raise click.ClickException(f"Card sync failed: {card_stats.error}")

    click.echo("Credit cards:")
    click.echo(f"  Bills: {card_stats.bills_inserted} new of {card_stats.bills_found} found")
    click.echo(f"  Payments: {card_stats.payments_inserted} new of {card_stats.payments_found} found")
    if run_matcher:
        click.echo(f"  Matches created: {card_stats.matches_created}")


@main.command()
@click.option("--store", "store_path", help="Record store JSON file (default: configured store)")
@click.pass_context
def match(ctx: click.Context, store_path: str | None) -> None:
    """Match unmatched credit-card payments to open bills."""
    store = _open_store(ctx, store_path)
    result = BillPaymentMatcher(store).match_all()

    click.echo(f"Matches created: {result.matches_created}")
    for bill_match in result.matches:
        click.echo(
            f"  Payment {bill_match.payment_id} -> bill {bill_match.bill_id} "
            f"(score {bill_match.score}, {bill_match.bill_status.value}, remaining {bill_match.remaining_amount})"
        )


@main.command()
@click.option("--store", "store_path", help="Record store JSON file (default: configured store)")
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Count bills due before this date as overdue (default: now)",
)
@click.pass_context
def summary(ctx: click.Context, store_path: str | None, as_of: datetime | None) -> None:
    """Show the outstanding amount, minimum due and overdue count of open bills."""
    store = _open_store(ctx, store_path)
    result = summarize_bills(store, FinancialTimestamp(as_of) if as_of else None)

    click.echo("Credit-card bills:")
    click.echo(f"  Open bills: {result.open_count}")
    click.echo(f"  Total outstanding: {result.total_outstanding}")
    click.echo(f"  Total minimum due: {result.total_minimum_due}")
    click.echo(f"  Overdue: {result.overdue_count}")


@main.command()
@click.option("--store", "store_path", help="Record store JSON file (default: configured store)")
@click.pass_context
def correct(ctx: click.Context, store_path: str | None) -> None:
    """Re-derive transaction direction and counterparty from the stored SMS text."""
    store = _open_store(ctx, store_path)
    corrected = correct_transaction_fields(store)
    click.echo(f"Transactions corrected: {corrected}")


@main.command()
@click.argument("text")
@click.option("--timestamp", type=int, help="SMS receipt time in epoch milliseconds (default: now)")
def classify(text: str, timestamp: int | None) -> None:
    """
    Show how a single SMS is classified and what would be extracted.

    Example:
      smsledger classify "Rs 500.00 debited via UPI on 15-May-25 to VPA shop@upi. Ref No 123"
    """
    received_millis = timestamp if timestamp is not None else FinancialTimestamp.now().to_epoch_millis()
    message = RawMessage(text=text, timestamp_millis=received_millis)

    try:
        received_at = message.received_at
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--timestamp") from e

    category, confidence = classify_message(text)
    record = process_message(message)
    bill = parse_credit_card_bill(text, received_at)
    payment = parse_credit_card_payment(text, received_at) if bill is None else None

    output = {
        "category": category.value,
        "confidence": confidence,
        "transaction": record.to_dict() if record else None,
        "credit_card_bill": bill.to_dict() if bill else None,
        "credit_card_payment": payment.to_dict() if payment else None,
    }
    click.echo(format_json(output))


if __name__ == "__main__":
    main()
