from __future__ import annotations

from datetime import datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from grocery_manager.services.inventory import ShortfallLine


def _latin1(text: str) -> str:
    # polices core FPDF = latin-1 uniquement
    return text.encode("latin-1", "replace").decode("latin-1")


def render_shopping_list_pdf(lines: list[ShortfallLine], last_order_date: datetime) -> bytes:
    """Bon de commande imprimable de la liste de courses courante."""
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, "SHOPPING LIST", new_x=XPos.LMARGIN, new_y=YPos.NEXT, align="C")
    pdf.ln(5)

    pdf.set_font("Helvetica", size=11)
    pdf.cell(0, 8, f"Last order date : {last_order_date.isoformat()}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(5)

    widths = (30, 80, 40, 30)
    pdf.set_font("Helvetica", "B", 11)
    for w, title in zip(widths, ("Item No", "Item Name", "Size/Weight", "Qty")):
        pdf.cell(w, 8, title, border=1)
    pdf.ln()

    pdf.set_font("Helvetica", size=11)
    if not lines:
        pdf.cell(sum(widths), 8, "No items in the shopping list", border=1)
        pdf.ln()
    for ln in lines:
        row = (ln.item_no, ln.item_name, ln.size, str(ln.needed_qty))
        for w, value in zip(widths, row):
            pdf.cell(w, 8, _latin1(value), border=1)
        pdf.ln()

    return bytes(pdf.output())
