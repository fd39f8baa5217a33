from .sales import (
    fetch_sale_summary,
    ledger_from_terms,
    list_sale_summaries,
    preview_payment,
    record_payment,
    summarize_sale,
)

__all__ = [
    "ledger_from_terms",
    "summarize_sale",
    "preview_payment",
    "fetch_sale_summary",
    "list_sale_summaries",
    "record_payment",
]
