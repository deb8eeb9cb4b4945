# cli.py - interactive terminal client for the product API
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pystore import StoreApiError, StoreClient

console = Console()
c = StoreClient(
    base_url=os.getenv("STORE_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY", "secret-api-key-123"),
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
def format_price(price: float) -> str:
    return f"${price:,.2f}"


def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Category", width=15)
    table.add_column("Stock", justify="center", width=7)

    for p in products:
        in_stock = p.get("inStock", False)
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            format_price(p.get("price", 0)),
            p.get("category", "N/A"),
            "[green]yes[/green]" if in_stock else "[red]no[/red]",
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("data", []))
    console.print(
        f"[dim]Page {page.get('page')} of {page.get('totalPages')} "
        f"({page.get('total')} products, {page.get('limit')} per page)[/dim]"
    )


def show_statistics(stats: Dict[str, Any]):
    table = Table(
        title=f"📊 Statistics ({stats.get('totalProducts', 0)} products)",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
    )
    table.add_column("Category", width=20)
    table.add_column("Count", justify="right", width=8)
    table.add_column("Total value", justify="right", width=14)
    table.add_column("In stock", justify="right", width=10)

    for category, group in stats.get("categoryCounts", {}).items():
        table.add_row(
            category,
            str(group.get("count", 0)),
            format_price(group.get("totalValue", 0)),
            str(group.get("inStock", 0)),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are shown as a red status panel and yield None.
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
    except StoreApiError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(f"{e.name} ({e.status_code}): {e.message}", False))
        return None
    except OSError as e:
        # requests' ConnectionError and Timeout are OSErrors
        status_message = f"Error: {e}"
        console.print(show_status(f"Cannot reach {c.base_url}: {e}", False))
        return None

    if success_msg:
        status_message = success_msg
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    page = try_api(c.list_products, limit=1000)
    product_cache = page["data"] if page else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter([str(p["id"]) for p in product_cache], ignore_case=True)


def get_category_completer():
    if not product_cache:
        refresh_product_cache()
    categories = sorted({p["category"] for p in product_cache})
    return WordCompleter(categories, ignore_case=True)


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
        "🛍️ Product API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    if not raw.isdigit():
        console.print("[red]Product IDs are positive integers.[/red]")
        return None
    return int(raw)


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("🏷️ Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("📝 Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete(
            "📂 Category", completer=get_category_completer(), default=current.get("category", "")
        ),
        "in_stock": Confirm.ask("📦 In stock?", default=current.get("inStock", True)),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search products", "6", "✏️ Update product"),
            ("3", "📊 Statistics", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
            page = IntPrompt.ask("Page", default=1)
            resp = try_api(c.list_products, category.strip() or None, page, success_msg="Products loaded")
            if resp:
                show_page(resp)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            resp = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if resp:
                show_products(resp["data"], title=f"🔍 {resp['total']} match(es) for '{term}'")

        elif choice == "3":
            resp = try_api(c.get_statistics, success_msg="Statistics loaded")
            if resp:
                show_statistics(resp)

        elif choice == "4":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
                if resp:
                    show_products([resp])

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if resp:
                show_products([resp["product"]], title=resp["message"])
                refresh_product_cache()

        elif choice == "6":
            pid = ask_product_id()
            current = try_api(c.get_product, pid) if pid is not None else None
            if current:
                fields = ask_product_fields(current)
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if resp:
                    show_products([resp["product"]], title=resp["message"])
                    refresh_product_cache()

        elif choice == "7":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_products([resp["product"]], title=resp["message"])
                    refresh_product_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
