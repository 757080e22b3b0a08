# Routes package init
"""
Fake Stack Overflow Backend — API Routes Package
==================================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - questions.py: /api/questions ...       (post, listings, detail, views)
    - answers.py:   /api/answers             (post, list)
    - tags.py:      /api/tags, /api/tags/ids (counts, lookup)
    - search.py:    /api/search              (tag/word search)
    - health.py:    /health                  (service health check)

Routes are thin: they extract request data, call a service, and return its
result. Business rules live in fakeso.services.
"""
