"""
Pages HTML (rendu serveur, pas de moteur de template).

Toutes les valeurs venant de la base passent par escape().
"""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Iterable

from grocery_manager.app.db.models.models_v1 import Item
from grocery_manager.services.inventory import ShortfallLine

TITLE = "PL Grocery Manager"

STYLE = """
    table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
    th { background-color: #f2f2f2; font-weight: bold; }
    .button {
        background-color: #4CAF50; color: white; padding: 10px 20px;
        border-radius: 5px; text-decoration: none; margin-bottom: 20px; border: none;
    }
    .error-message { text-align: center; color: red; font-size: 20px; margin: 20px 0; }
    .container { max-width: 960px; margin: 0 auto; }
"""


def _layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{STYLE}</style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>
"""


def _rows(cells_per_row: Iterable[Iterable[object]], colspan: int, empty: str) -> str:
    rows = [
        "<tr>" + "".join(f"<td>{escape(str(c))}</td>" for c in cells) + "</tr>"
        for cells in cells_per_row
    ]
    if not rows:
        return f'<tr><td colspan="{colspan}">{escape(empty)}</td></tr>'
    return "\n".join(rows)


def render_login() -> str:
    body = f"""
        <h1>{TITLE}</h1>
        <form action="/authenticate" method="POST">
            <label for="customerNumber">Customer number</label>
            <input type="text" id="customerNumber" name="customerNumber" required>
            <button type="submit" class="button">Log in</button>
        </form>
"""
    return _layout(TITLE, body)


def render_error(title: str, message: str, retry_href: str = "/") -> str:
    body = f"""
        <h1>{escape(title)}</h1>
        <p class="error-message">{escape(message)}</p>
        <a href="{escape(retry_href)}" class="button">Try Again</a>
"""
    return _layout(title, body)


def render_auth_error() -> str:
    return render_error("Authentication Error", "Sorry, you are not authenticated.")


def render_main(lines: list[ShortfallLine], last_order_date: datetime) -> str:
    table = _rows(
        ((ln.item_no, ln.item_name, ln.size, ln.needed_qty) for ln in lines),
        colspan=4,
        empty="No items in the shopping list",
    )
    body = f"""
        <h1>{TITLE}</h1>
        <a href="/update-stock" class="button">Add Products</a>
        <a href="/my-products" class="button">My Products</a>
        <a href="/main/shopping-list.pdf" class="button">Print List</a>
        <p><strong>Last Order Date:</strong> {escape(last_order_date.isoformat())}</p>
        <h2>Current Shopping List</h2>
        <table>
            <thead>
                <tr><th>Item No</th><th>Item Name</th><th>Size/Weight</th><th>Quantity Needed</th></tr>
            </thead>
            <tbody>
{table}
            </tbody>
        </table>
        <form action="/update-order-date" method="POST">
            <button type="submit" class="button" style="width: 100%; padding: 15px;">Order</button>
        </form>
"""
    return _layout(TITLE, body)


def render_products(items: list[Item]) -> str:
    table = _rows(
        (
            (it.item_no, it.item_name, it.size, it.current_stock_level, it.desired_stock_level)
            for it in items
        ),
        colspan=5,
        empty="No products found",
    )
    body = f"""
        <h1>Grocery Management Screen</h1>
        <a href="/main" class="button">Back to Main</a>
        <table>
            <thead>
                <tr>
                    <th>Item No</th><th>Item Name</th><th>Size/Weight</th>
                    <th>Current Stock Level</th><th>Desired Stock Level</th>
                </tr>
            </thead>
            <tbody>
{table}
            </tbody>
        </table>
"""
    return _layout(f"My Products - {TITLE}", body)


def render_update_stock_form() -> str:
    body = """
        <h1>Add / Update Product</h1>
        <form action="/update-stock" method="POST">
            <p><label>Item No <input type="text" name="itemNo" required></label></p>
            <p><label>Item Name <input type="text" name="itemName" required></label></p>
            <p><label>Size/Weight <input type="text" name="size"></label></p>
            <p><label>Desired Stock Level <input type="number" min="0" name="desiredStockLevel" required></label></p>
            <p><label>Current Stock Level <input type="number" min="0" name="currentStockLevel" required></label></p>
            <button type="submit" class="button">Save</button>
        </form>
        <a href="/main" class="button">Back to Main</a>
"""
    return _layout(f"Update Stock - {TITLE}", body)
