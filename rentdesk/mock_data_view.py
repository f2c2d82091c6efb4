"""HTML overview of the in-memory store, for poking at mock mode in a browser."""
from __future__ import annotations

import html
import json
from typing import Any, Callable, Dict, List, Sequence, Tuple

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from rentdesk.services.mock_store import MockDataStore, get_mock_store

router = APIRouter()

Row = Dict[str, Any]

PAGE_TEMPLATE = """
<html>
    <head>
        <title>Mock Data Overview</title>
        <style>
            body {{ font-family: Arial, sans-serif; margin: 2rem; color: #1f2937; }}
            nav a {{ margin-right: 1rem; }}
            section {{ margin-top: 2rem; }}
            table {{ border-collapse: collapse; width: 100%; font-size: 0.9rem; }}
            th, td {{ border: 1px solid #d1d5db; padding: 0.4rem 0.6rem; text-align: left; }}
            th {{ background-color: #eef2ff; }}
            tbody tr:nth-child(odd) {{ background-color: #f9fafb; }}
        </style>
    </head>
    <body>
        <h1>Mock Data Overview</h1>
        <nav>{nav}</nav>
        {sections}
    </body>
</html>
"""


def _cell(value: Any) -> str:
    if value is None:
        text = ""
    elif isinstance(value, (str, int, float, bool)):
        text = str(getattr(value, "value", value))
    else:
        text = json.dumps(value, default=str)
    return f"<td>{html.escape(text)}</td>"


def _render_section(title: str, columns: Sequence[str], rows: List[Row]) -> str:
    heading = f'<section id="{title.lower()}"><h2>{html.escape(title)}</h2>'
    if not rows:
        return heading + "<p>No records found.</p></section>"

    head = "".join(f"<th>{html.escape(column)}</th>" for column in columns)
    body = "".join(
        "<tr>" + "".join(_cell(row.get(column)) for column in columns) + "</tr>"
        for row in rows
    )
    return f"{heading}<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table></section>"


def _products(store: MockDataStore) -> List[Row]:
    return [
        {**product, "images": len(product.get("images") or [])}
        for product in store.products.records()
    ]


def _orders(store: MockDataStore) -> List[Row]:
    return [{**order, "lines": len(order["items"])} for order in store.orders.records()]


def _drafts(store: MockDataStore) -> List[Row]:
    rows: List[Row] = []
    for draft_id, draft in store.drafts.items():
        rows.append(
            {
                "draft_id": draft_id,
                "customer": draft.customer,
                "rental_id": draft.rental_id,
                "rental_template": draft.rental_template,
                "lines": len(draft.items),
                "total": draft.compute_totals().total,
                "terms_accepted": draft.terms_accepted,
            }
        )
    return rows


SECTIONS: Tuple[Tuple[str, Tuple[str, ...], Callable[[MockDataStore], List[Row]]], ...] = (
    (
        "Products",
        ("id", "name", "category", "brand", "condition", "price_per_day", "stock",
         "available_stock", "is_rentable", "images", "created_at"),
        _products,
    ),
    (
        "Rentals",
        ("id", "user_name", "user_email", "product_id", "start_date", "end_date",
         "total_days", "total_price", "status", "pickup_date", "return_date", "notes"),
        lambda store: store.rentals.records(),
    ),
    (
        "Orders",
        ("order_id", "customer", "rental_id", "rental_duration", "lines",
         "untaxed_total", "tax", "total", "status", "created_at"),
        _orders,
    ),
    (
        "Drafts",
        ("draft_id", "customer", "rental_id", "rental_template", "lines", "total", "terms_accepted"),
        _drafts,
    ),
    (
        "Payments",
        ("id", "amount", "currency", "receipt", "status"),
        lambda store: store.payments.records(),
    ),
)


@router.get("/mock-data", response_class=HTMLResponse)
async def view_mock_data() -> HTMLResponse:
    """Render every collection of the shared in-memory store as an HTML table."""
    store = get_mock_store()

    nav = "".join(f'<a href="#{title.lower()}">{title}</a>' for title, _, _ in SECTIONS)
    sections = "".join(
        _render_section(title, columns, load(store)) for title, columns, load in SECTIONS
    )
    return HTMLResponse(content=PAGE_TEMPLATE.format(nav=nav, sections=sections))


@router.delete("/mock-data/{collection}/{record_id}")
async def delete_mock_record(collection: str, record_id: str) -> Dict[str, str]:
    """Remove a product, order or draft from the in-memory store."""
    store = get_mock_store()
    name = collection.strip().lower().rstrip("s") + "s"

    if name == "products":
        deleted = await store.products.delete(record_id)
    elif name == "orders":
        deleted = await store.orders.delete(record_id)
    elif name == "drafts":
        deleted = store.drafts.delete(record_id)
    else:
        raise HTTPException(status_code=404, detail="Unsupported mock data collection")

    if not deleted:
        raise HTTPException(status_code=404, detail="Record not found")
    return {"status": "deleted", "collection": name, "record_id": record_id}
