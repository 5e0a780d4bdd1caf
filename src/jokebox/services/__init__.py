"""Business logic services for the jokebox application.

Modules are imported directly (``jokebox.services.content_service`` and so on);
this package stays free of eager imports because the stores depend on
:mod:`jokebox.services.listing`.
"""
