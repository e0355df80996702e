"""
API package containing the HTTP routes.

``router.router`` bundles every endpoint module in ``endpoints`` and
is mounted by ``create_app`` under the ``/api`` prefix.
"""
