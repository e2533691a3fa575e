"""
GOV.UK Prototype Journey Schema (govproto)

The authoritative, presentation-free description of a prototype service:
projects, pages, form fields and the conditions that route a user between
pages.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - HTML or GOV.UK Frontend markup
    - Persistence (SQL, migrations, storage ids)
    - Editor interaction (drag, zoom, pan)
    - Network transport

It defines JOURNEY STRUCTURE and the rules that keep it consistent.

Renderers, exporters and editors consume these models unchanged.
"""

__version__ = "0.1.0"
