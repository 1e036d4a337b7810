"""Type aliases used across InvoicePatch."""

from __future__ import annotations

from datetime import date
from typing import Any

JsonDict = dict[str, Any]
ContractorId = str
DateLike = date | str
