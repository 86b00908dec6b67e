"""Weather-aware trip planning and packing checklists for Canadian parks."""

__version__ = "0.1.0"
