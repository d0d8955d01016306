"""Server-side rendering with kida: environment setup and the page shell."""

from linkbox.templating.integration import create_environment, render_page

__all__ = ["create_environment", "render_page"]
