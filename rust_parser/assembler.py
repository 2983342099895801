"""rust_parser/assembler.py - sklejanie bloków w końcowy tekst dokumentu."""

from __future__ import annotations

from data_model.blocks import Document


def assemble_document(blocks: Document) -> str:
    """
    Bloki w kolejności, dokładnie jedna pusta linia między nimi,
    dokładnie jeden znak nowej linii na końcu. Brak bloków → "".
    """
    parts = [block.render().strip("\n") for block in blocks]
    parts = [p for p in parts if p.strip()]
    if not parts:
        return ""
    return "\n\n".join(parts) + "\n"
