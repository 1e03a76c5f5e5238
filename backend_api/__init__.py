"""
Emissions Dashboard API

HTTP layer serving the emissions dataset, summaries, rule-based chat and
cached web search to the dashboard frontend.
"""

__version__ = "1.0.0"
__author__ = "Emissions Dashboard Team"
