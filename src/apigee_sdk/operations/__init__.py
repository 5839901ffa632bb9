"""Resource operations exposed by the ``Apigee`` facade.

Each module contributes one mixin class:
- ``common``: Shared helpers and the table-driven ``endpoint`` factory
- ``proxies``: API proxies and revisions
- ``environments``: Environments
- ``deployments``: Deployment status queries
- ``caches``: Environment caches
- ``keyvaluemaps``: Environment key-value maps
- ``sharedflows``: Shared flows
- ``products``: API products
- ``organizations``: The organization itself
"""
