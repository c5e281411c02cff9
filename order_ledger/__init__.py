"""
Order Ledger
Internal work orders: numbering, status, search and printable documents.
"""

from .config import Capabilities, SECTION_OPTIONS
from .errors import LedgerError, ValidationError, NotFoundError, PersistenceWarning
from .models import OrderStatus, OrderFormData, OrderRecord
from .ledger import Ledger
from .query import QueryView, QueryFilters, SortKey
from .persistence import PersistenceGateway, MemoryGateway, JsonFileGateway
from .document import Document, Page
from .layout import DocumentLayoutEngine
from .surface import ReportLabSurface

__version__ = "1.0.0"
