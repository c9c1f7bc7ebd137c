"""CLI for Online Payments.

Provides the interactive payment menu and a viewer for the transaction log.
"""

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from online_payments.config import Settings, get_settings
from online_payments.domain.payments import PaymentKind, Receipt
from online_payments.domain.value_objects import Currency
from online_payments.infrastructure.transaction_log import FileTransactionLog
from online_payments.infrastructure.user_store import (
    InMemoryUserStore,
    RegistrationError,
    Session,
)
from online_payments.monitoring.logging import setup_logging
from online_payments.services.account import build_profile, history_rows
from online_payments.services.processor import AttemptError, TransactionProcessor

# Initialize Typer app
app = typer.Typer(
    name="online-payments",
    help="Online Payments - console demo of card, wallet and UPI payments",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger()

INSTRUMENT_PROMPTS = {
    PaymentKind.CARD: ("Enter Card Number", "Invalid card number!"),
    PaymentKind.WALLET: ("Enter Wallet Email", "Invalid wallet email!"),
    PaymentKind.TRANSFER: ("Enter UPI ID", "Invalid UPI ID!"),
}

PAYMENT_MENU = {
    "1": PaymentKind.CARD,
    "2": PaymentKind.WALLET,
    "3": PaymentKind.TRANSFER,
}


class PaymentShell:
    """
    Interactive menu on top of a Session and a TransactionProcessor.

    Everything the shell knows about payments comes back from the core as
    plain data; the shell only prompts and renders.
    """

    def __init__(
        self,
        session: Session,
        processor: TransactionProcessor,
        console: Console,
    ):
        self.session = session
        self.processor = processor
        self.console = console
        self.currency = processor.currency

    def ask(self, prompt: str, password: bool = False) -> str:
        return self.console.input(f"{prompt}: ", password=password)

    def run(self) -> None:
        """Loop until the user picks Exit from the auth menu."""
        while True:
            if self.session.is_authenticated:
                self.user_menu()
            elif not self.auth_menu():
                return

    # ------------------ Auth Menu ------------------

    def auth_menu(self) -> bool:
        """Returns False when the user chose to exit."""
        self.console.print("\n[bold yellow]=== Online Payment System ===[/bold yellow]")
        self.console.print("[yellow]1. Register\n2. Login\n3. Exit[/yellow]")
        option = self.ask("Choose option").strip()

        if option == "1":
            self.register()
        elif option == "2":
            self.login()
        elif option == "3":
            return False
        else:
            self.console.print("[red]Invalid option![/red]")
        return True

    def register(self) -> None:
        phone = self.ask("Enter Phone Number")
        email = self.ask("Enter Email")
        password = self.ask("Enter Password", password=True)
        bank_name = self.ask("Bank Name")
        account_number = self.ask("Bank Account Number")
        ifsc = self.ask("IFSC Code")

        try:
            self.session.store.register(
                phone_number=phone,
                password=password,
                email=email,
                bank_name=bank_name,
                bank_account_number=account_number,
                ifsc=ifsc,
            )
        except RegistrationError as e:
            self.console.print(f"[red]❌ {e}[/red]")
            return
        self.console.print("[green]✅ Registration successful! You can login now.[/green]")

    def login(self) -> None:
        phone = self.ask("Enter Phone Number")
        password = self.ask("Enter Password", password=True)

        user = self.session.login(phone, password)
        if user is None:
            self.console.print("[red]❌ Invalid credentials![/red]")
            return
        self.console.print(f"[green]✅ Welcome {user.phone_number}![/green]")

    # ------------------ User Menu ------------------

    def user_menu(self) -> None:
        user = self.session.current_user
        self.console.print(f"\n[bold yellow]=== Welcome {user.phone_number} ===[/bold yellow]")
        self.console.print(
            "[yellow]1. Card Payment\n2. Wallet Payment\n3. UPI Payment\n"
            "4. View Payment History\n5. View Profile\n6. Logout[/yellow]"
        )
        option = self.ask("Choose option").strip()

        if option in PAYMENT_MENU:
            self.make_payment(PAYMENT_MENU[option])
        elif option == "4":
            self.show_history()
        elif option == "5":
            self.show_profile()
        elif option == "6":
            self.session.logout()
            self.console.print("Logged out successfully.")
        else:
            self.console.print("[red]Invalid option![/red]")

    def ask_amount(self) -> Decimal:
        """Re-prompt until a positive decimal is entered."""
        raw = self.ask(f"Enter amount (max {self.currency.symbol}{self.processor.max_amount})")
        while True:
            try:
                value = Decimal(raw.strip())
            except InvalidOperation:
                value = None
            if value is not None and value.is_finite() and value > 0:
                return value
            raw = self.ask("Invalid amount! Enter again")

    def make_payment(self, kind: PaymentKind) -> None:
        user = self.session.current_user
        amount = self.ask_amount()

        error = self.processor.check_amount(amount)
        if error is not None:
            self.console.print(f"[red]{self._describe_error(error, kind)}[/red]")
            return

        prompt, invalid_message = INSTRUMENT_PROMPTS[kind]
        instrument = self.ask(prompt).strip()
        if not self.processor.validate_instrument(kind, instrument):
            self.console.print(f"[red]{invalid_message}[/red]")
            return

        confirmed = self.ask("Confirm payment? (Y/N)").strip().upper() == "Y"
        result = self.processor.attempt(user, kind, amount, instrument, confirmed)

        if result.error is not None:
            self.console.print(f"[red]{self._describe_error(result.error, kind)}[/red]")
        elif result.ok:
            self.console.print(
                f"\n[green]Processing {kind.label} Payment: {result.payment.amount}[/green]"
            )
            self.render_receipt(result.receipt)
        else:
            self.console.print("Payment cancelled.")

        if result.payment is not None and not result.logged:
            self.console.print("[yellow]Warning: transaction log could not be written.[/yellow]")

    def _describe_error(self, error: AttemptError, kind: PaymentKind) -> str:
        if error is AttemptError.LIMIT_EXCEEDED:
            return (
                f"❌ Amount exceeds {self.currency.symbol}{self.processor.max_amount} limit!"
            )
        if error is AttemptError.INVALID_AMOUNT:
            return "❌ Amount must be positive!"
        return INSTRUMENT_PROMPTS[kind][1]

    # ------------------ Rendering ------------------

    def render_receipt(self, receipt: Receipt) -> None:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold")
        grid.add_column()
        for label, value in receipt.lines():
            grid.add_row(f"{label}:", value)
        self.console.print(Panel(grid, title=receipt.title, border_style="cyan", expand=False))

    def show_history(self) -> None:
        rows = history_rows(self.session.current_user)
        if not rows:
            self.console.print("[magenta]No transactions yet.[/magenta]")
            return

        table = Table(title="Payment History", title_style="magenta")
        table.add_column("ID", no_wrap=True)
        table.add_column("Amount", justify="right")
        table.add_column("Date")
        table.add_column("Type")
        table.add_column("Status")
        for row in rows:
            table.add_row(
                row.payment_id,
                str(row.amount),
                row.date.strftime("%Y-%m-%d %H:%M:%S"),
                row.kind_name,
                row.status.value,
            )
        self.console.print(table)

    def show_profile(self) -> None:
        profile = build_profile(self.session.current_user, self.currency)

        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold")
        grid.add_column()
        grid.add_row("Phone Number:", profile.phone_number)
        grid.add_row("Email:", profile.email)
        grid.add_row("Bank Name:", profile.bank_name)
        grid.add_row("Account Number:", profile.bank_account_number)
        grid.add_row("IFSC:", profile.ifsc)
        grid.add_row("Total Transactions:", str(profile.total_transactions))
        grid.add_row("Total Spent:", str(profile.total_amount))
        self.console.print(Panel(grid, title="User Profile", border_style="cyan", expand=False))


def build_shell(
    settings: Settings,
    log_path: Optional[Path] = None,
    shell_console: Optional[Console] = None,
) -> PaymentShell:
    """Wire store, session, transaction log and processor from settings."""
    store = InMemoryUserStore(
        allow_duplicate_phone=settings.allow_duplicate_phone,
        password_hash_iterations=settings.password_hash_iterations,
    )
    processor = TransactionProcessor(
        store=store,
        transaction_log=FileTransactionLog(log_path or Path(settings.transaction_log_path)),
        max_amount=settings.max_transaction_amount,
        currency=Currency(settings.currency),
    )
    return PaymentShell(Session(store), processor, shell_console or console)


@app.command()
def shell(
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Transaction log file (defaults to settings)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Start the interactive payment menu."""
    settings = get_settings()
    if verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    setup_logging(settings)

    payment_shell = build_shell(settings, log_file)
    try:
        payment_shell.run()
    except (EOFError, KeyboardInterrupt):
        console.print()
    logger.debug("shell.exited", users=len(payment_shell.session.store))


@app.command()
def log(
    lines: int = typer.Option(
        20,
        "--lines",
        "-n",
        help="Number of most recent lines to show",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Transaction log file (defaults to settings)",
    ),
) -> None:
    """Show the most recent transaction log lines."""
    settings = get_settings()
    path = log_file or Path(settings.transaction_log_path)

    if not path.exists():
        console.print(f"[red]Error:[/red] Transaction log not found: {path}")
        raise typer.Exit(1)

    entries = FileTransactionLog(path).tail(lines)
    if not entries:
        console.print("[yellow]Transaction log is empty.[/yellow]")
        return
    for entry in entries:
        console.print(entry, markup=False, highlight=False, soft_wrap=True)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
