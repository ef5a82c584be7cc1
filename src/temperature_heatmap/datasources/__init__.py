"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # URLs and constants
    └── {feature}.py      # Fetch and transform functions

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above.
   See ``global_temperature/`` for an example.

2. Write fetch functions that return pydantic models::

       from temperature_heatmap.services.http import session

       def fetch_something(url: str) -> Something:
           resp = session.get(url)
           resp.raise_for_status()
           return Something.model_validate(resp.json())

3. Re-export the public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline in ``flows/build.py`` and add tests in
   ``tests/test_{name}.py``.
"""
