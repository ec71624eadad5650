# cli.py
import os
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_BASE_URL", "http://127.0.0.1:8085"),
    api_key=os.getenv("CATALOG_API_KEY"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Categories", width=12)
    table.add_column("Description", width=24)
    table.add_column("Image", width=16)
    table.add_column("Status", width=8)

    for p in products:
        active = p.get("status", False)
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            f"${p.get('price', 0)}",
            ", ".join(str(cat) for cat in p.get("categories", [])),
            p.get("description", ""),
            p.get("image", ""),
            "[green]active[/green]" if active else "[red]inactive[/red]"
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    Any error is shown in the status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def refresh_products():
    global product_cache
    product_cache = try_api(c.list_products) or []
    return product_cache


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    if not product_cache:
        refresh_products()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def find_cached(product_id: str) -> Optional[Dict[str, Any]]:
    for p in product_cache:
        if p.get("id") == product_id:
            return p
    return None


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: str = "10.00") -> Decimal:
    while True:
        raw = Prompt.ask(message, default=default)
        try:
            price = Decimal(raw)
        except InvalidOperation:
            console.print("[red]Please enter a valid price.[/red]")
            continue
        if price < 0:
            console.print("[red]Price cannot be negative.[/red]")
            continue
        return price


def ask_categories(message: str, default: str = "") -> List[int]:
    while True:
        raw = Prompt.ask(message, default=default)
        try:
            return [int(part) for part in raw.replace(",", " ").split()]
        except ValueError:
            console.print("[red]Categories are integer codes, e.g. 1, 2, 5[/red]")


def ask_product(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Product name", default=current.get("name", "")),
        "price": ask_price("💰 Price", default=str(current.get("price", "10.00"))),
        "categories": ask_categories(
            "🏷️ Categories", default=", ".join(str(cat) for cat in current.get("categories", []))
        ),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "image": prompt_with_autocomplete("Image", default=current.get("image", "")),
        "status": Confirm.ask("Active?", default=current.get("status", True)),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    refresh_products()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products"),
            ("2", "➕ Create product"),
            ("3", "✏️ Update product"),
            ("4", "🗑️ Delete product"),
            ("q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            fields = ask_product()
            pid = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created successfully", **fields)
            if pid:
                console.print(Panel(f"Created product: [green]{pid}[/green]"))
            refresh_products()

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            current = find_cached(pid)
            if current is None:
                console.print(f"[yellow]Product {pid} is not in the local list, starting from blank fields[/yellow]")
            fields = ask_product(current)
            updated = try_api(c.update_product, pid, **fields)
            if updated:
                console.print(show_status(f"Product {pid} updated", True))
            elif updated is False:
                console.print(show_status(f"Product {pid} not found", False))
            refresh_products()

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                deleted = try_api(c.delete_product, pid)
                if deleted:
                    console.print(show_status(f"Product {pid} deleted", True))
                elif deleted is False:
                    console.print(show_status(f"Product {pid} not found", False))
                refresh_products()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyCatalog! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
