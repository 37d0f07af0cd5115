"""Routing — trie-based route table with O(path-depth) matching.

Routes are registered during setup (directly, or by documentation
registries mounting their own handlers) and the table is frozen
when the app starts serving.
"""

from warble.routing.route import Route, RouteMatch
from warble.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
