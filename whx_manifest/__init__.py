"""WHX manifest generator.

Converts a merchant order-export workbook into the warehouse outbound manifest
expected by the carrier, resolving SKUs through a reference mapping table.
"""

__version__ = "0.4.0"

__all__ = ["__version__"]
