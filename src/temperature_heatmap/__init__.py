"""Temperature Heatmap - monthly global land-surface temperature heat map.

Architecture::

    datasources/   Dataset fetch and month normalization (global_temperature)
    scales.py      Band, threshold and linear scales for the chart
    renderers/     Pure data -> HTML/SVG (heat map, legend, tooltip)
    flows/         Prefect orchestration (fetch -> normalize -> render -> write)
    services/      Shared utilities (HTTP session)

Data flow: datasources -> scales -> renderers -> site/index.html

Extension points are described in each package's docstring:
  - New data source:   datasources/__init__.py
  - New UI module:     renderers/__init__.py
"""

__version__ = "0.1.0"

from temperature_heatmap.config import Settings
from temperature_heatmap.schemas import Dataset, MonthlyRecord

__all__ = ["Dataset", "MonthlyRecord", "Settings", "__version__"]
