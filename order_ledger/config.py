"""
Order Ledger Configuration
"""

from dataclasses import dataclass

# ─── STORAGE ───
STORAGE_FILE = "internal_orders_data.json"

# ─── SECTIONS ───
# Suggested values for the section field; any non-empty text is accepted.
SECTION_OPTIONS = (
    "Jacquard",
    "Cordão",
    "Tinturaria",
    "Calandra",
    "Estamparia/Ponteiras",
    "Expedição",
)


@dataclass(frozen=True)
class Capabilities:
    """Optional fields shown in printed documents"""
    has_commercial_agent: bool = True
    has_invoice_number: bool = True


DEFAULT_CAPABILITIES = Capabilities()
