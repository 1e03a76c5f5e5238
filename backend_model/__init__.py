"""
Emissions data model: configuration, logging, dataset and aggregation
"""
