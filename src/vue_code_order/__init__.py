"""
Vue Code Order
==============

Checks that the top-level statements of a Vue ``<script setup>`` block follow
a prescribed category order: imports, types, framework initialization,
stores, libraries, variables, server requests, computed hooks, application
functions, modals, watchers and lifecycle hooks.

Main features:
- Regex-driven categorization of calls, destructured bindings and identifiers
- Configurable order and rule table (merged into the defaults)
- Detection of cyclic dependencies between categories
- Inline eslint-disable directives
- Category lookup for editor hovers

Usage example:
    vue-code-order check dumps/ --recursive --allow-cyclic
"""

__version__ = "1.0.0"
__author__ = "vue-code-order developers"
__description__ = "Order checker for Vue script setup blocks"
