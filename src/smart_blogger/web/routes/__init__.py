# ABOUTME: Route modules for the web application.
# ABOUTME: settings renders the option form, api exposes health and the run trigger.

from smart_blogger.web.routes import api, settings

__all__ = ["api", "settings"]
