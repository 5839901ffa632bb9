"""Client package for the Apigee management API.

Provides HTTP setup, token management and request dispatch:
- ``session``: ``httpx.AsyncClient`` factory and response helpers
- ``token_manager``: OAuth2 token lifecycle with password and refresh grants
- ``api_client``: Bearer-authenticated request dispatch and status classification
"""
