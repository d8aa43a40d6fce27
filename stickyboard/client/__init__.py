"""
Sticky Store Client.

HTTP client side of the board: talks to the sticky store API over httpx.

- api.py: generic async APIClient (base URL, timeout, X-Frontend-ID header)
- persistence.py: StickyStoreClient with create/list_all/update/delete
"""
