"""Terminal dashboard for the banking API."""

from datetime import datetime

import click

from .api import BankingClient, ClientError, DEFAULT_API_URL, TRANSACTION_TYPES, validate_transaction_input


def _format_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%a %b %d %Y")
    except (AttributeError, ValueError):
        return str(value)


def render_account_card(account: dict) -> str:
    return "\n".join([
        account["accountHolder"],
        f"  Account Number: {account['accountNumber']}",
        f"  Type: {account['accountType']}",
        f"  Balance: ${float(account['balance']):.2f}",
    ])


def render_transactions(page: dict) -> str:
    transactions = page.get("transactions", [])
    pagination = page.get("pagination", {})

    if not transactions:
        lines = ["No transactions found."]
    else:
        lines = [f"{'Date':<16} {'Type':<11} {'Description':<30} {'Amount ($)':>12}"]
        for t in transactions:
            lines.append(
                f"{_format_date(t['date']):<16} {t['type']:<11} "
                f"{t['description'][:30]:<30} {float(t['amount']):>12.2f}"
            )

    if pagination:
        total_pages = max(pagination.get("totalPages", 0), 1)
        lines.append(
            f"Page {pagination.get('currentPage', 1)} of {total_pages} "
            f"({pagination.get('totalTransactions', 0)} transactions)"
        )
    return "\n".join(lines)


@click.group()
@click.option(
    "--api-url",
    envvar="BANKDASH_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="Base URL of the banking API."
)
@click.pass_context
def cli(ctx, api_url):
    """Banking dashboard: accounts, transactions and history."""
    if ctx.obj is None:
        ctx.obj = ctx.with_resource(BankingClient(api_url))


@cli.command("accounts")
@click.pass_obj
def list_accounts(client):
    """Show all accounts."""
    try:
        accounts = client.get_accounts()
    except ClientError as e:
        raise click.ClickException(e.message)

    click.echo("Accounts")
    for account in accounts:
        click.echo(render_account_card(account))


@cli.command("account")
@click.argument("account_id")
@click.pass_obj
def show_account(client, account_id):
    """Show a single account."""
    try:
        account = client.get_account(account_id)
    except ClientError as e:
        raise click.ClickException(e.message)

    click.echo(render_account_card(account))


@cli.command("transactions")
@click.argument("account_id")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--limit", default=10, show_default=True, type=click.IntRange(1, 100))
@click.pass_obj
def list_transactions(client, account_id, page, limit):
    """Show an account's transaction history, newest first."""
    try:
        body = client.get_transactions(account_id, page=page, limit=limit)
    except ClientError as e:
        raise click.ClickException(e.message)

    click.echo(render_transactions(body.get("data", {})))


@cli.command("transact")
@click.argument("account_id")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False))
@click.option("--amount", type=float)
@click.option("--description")
@click.pass_obj
def create_transaction(client, account_id, transaction_type, amount, description):
    """Create a deposit, withdrawal or transfer."""
    if transaction_type:
        transaction_type = transaction_type.upper()

    try:
        balance = client.get_account(account_id)["balance"]
    except ClientError as e:
        raise click.ClickException(e.message)

    errors = validate_transaction_input(transaction_type, amount, description, balance=balance)
    if errors:
        for field, message in errors.items():
            click.echo(f"{field}: {message}", err=True)
        raise click.exceptions.Exit(2)

    try:
        body = client.create_transaction(account_id, {
            "type": transaction_type,
            "amount": amount,
            "description": description.strip(),
        })
    except ClientError as e:
        raise click.ClickException(e.message)

    data = body["data"]
    click.echo(
        f"{data['transactionType']} of ${float(data['amount']):.2f} recorded. "
        f"New balance: ${float(data['newBalance']):.2f}"
    )


if __name__ == "__main__":
    cli()
