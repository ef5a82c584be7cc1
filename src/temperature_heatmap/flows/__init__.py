"""
Prefect flows for the heat map pipeline.

Flows:
- build: Fetch the dataset, normalize it, render the heat map page

Usage (local):
    python -m temperature_heatmap.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m temperature_heatmap.flows.build
"""
