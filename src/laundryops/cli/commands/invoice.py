"""Invoice commands."""

import click
from laundryops.cli.error_handling import check_access, handle_domain_error
from laundryops.domain.access import INVOICES
from laundryops.domain.invoice import ALL, InvoiceService
from laundryops.export import ExportService
from laundryops.export.service import INVOICE_FORMATS
from laundryops.utils.amount_parser import format_rupiah


@click.group()
@click.pass_context
def invoice_group(ctx):
    """View, edit and export invoices computed from the log book."""
    check_access(ctx, INVOICES)


@invoice_group.command("list")
@click.option("--month", default=ALL, help="Month number 1-12 or 'all' (default: all)")
@click.option("--year", default=ALL, help="Four-digit year or 'all' (default: all)")
@click.pass_context
def list_invoices(ctx, month: str, year: str):
    """List invoices, one per pick-up date."""
    service = InvoiceService(ctx.obj["db"])

    try:
        invoices = service.list_invoices(month=month, year=year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"\n{'No. Invoice':<22} {'Pick Up':<11} {'Return':<11} {'Total':>14}")
    click.echo("-" * 61)
    for inv in invoices:
        return_date = inv.return_date.isoformat() if inv.return_date else "-"
        click.echo(
            f"{inv.invoice_no:<22} {inv.pickup_date.isoformat():<11} "
            f"{return_date:<11} {format_rupiah(inv.total_price):>14}"
        )


@invoice_group.command("update")
@click.argument("invoice_no")
@click.option("--return-date", help="Return date (YYYY-MM-DD)")
@click.option("--clear-return-date", is_flag=True, help="Remove the return date")
@click.option("--number", "new_invoice_no", help="Replacement invoice number")
@click.pass_context
def update_invoice(ctx, invoice_no: str, return_date: str, clear_return_date: bool, new_invoice_no: str):
    """Edit an invoice's return date or number."""
    service = InvoiceService(ctx.obj["db"])

    if return_date and clear_return_date:
        click.echo("Error: Use either --return-date or --clear-return-date, not both", err=True)
        ctx.exit(1)

    kwargs = {"new_invoice_no": new_invoice_no}
    if clear_return_date:
        kwargs["return_date"] = None
    elif return_date is not None:
        kwargs["return_date"] = return_date

    try:
        invoice = service.update_invoice(invoice_no, **kwargs)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    return_str = invoice.return_date.isoformat() if invoice.return_date else "-"
    click.echo(f"Updated invoice {invoice.invoice_no} (return date: {return_str})")


@invoice_group.command("export")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--format", "file_format", type=click.Choice(INVOICE_FORMATS, case_sensitive=False), default="csv", help="Output format (default: csv)")
@click.option("--month", default=ALL, help="Month number 1-12 or 'all'")
@click.option("--year", default=ALL, help="Four-digit year or 'all'")
@click.pass_context
def export_invoices(ctx, output: str, file_format: str, month: str, year: str):
    """Export the filtered invoices to OUTPUT."""
    service = ExportService(ctx.obj["db"])

    try:
        path = service.export_invoices(output, file_format=file_format, month=month, year=year)
        click.echo(f"Exported invoices to {path}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
