"""Routing — route table and reverse generation.

Routes are registered during setup. The router writes outbound paths
from route keys (``Router.generate``), which makes it the
``RouteGenerator`` the URL writer and rewriter consume.
"""
