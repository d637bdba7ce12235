"""orgmap: browse a scraped group/subgroup/project hierarchy."""

__version__ = "0.1.0"
