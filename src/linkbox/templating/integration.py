"""Kida environment setup and the component renderer.

The environment is created once during ``App`` compilation and passed
through the request pipeline. Templates ship inside the package, so
rendering has no failure mode of its own once the app is frozen.
"""

from kida import Environment, PackageLoader
from kida.template import Markup

from linkbox.components import Component

SHELL_TEMPLATE = "shell.html"
STYLESHEET = "/pub/style.css"
SCRIPTS = ("/pub/app.js",)


def create_environment(*, debug: bool = False) -> Environment:
    """Create the kida Environment for linkbox's bundled templates."""
    env = Environment(
        loader=PackageLoader("linkbox", "templates"),
        autoescape=True,
        auto_reload=debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env


def render_body(env: Environment, component: Component) -> str:
    """Render just the component's body fragment."""
    template = env.get_template(component.template)
    return template.render(component.context())


def render_page(env: Environment, component: Component, *, title: str = "links") -> str:
    """Render *component* inside the full HTML document shell."""
    shell = env.get_template(SHELL_TEMPLATE)
    return shell.render(
        {
            "title": title,
            "stylesheet": STYLESHEET,
            "scripts": SCRIPTS,
            "body": Markup(render_body(env, component)),
        }
    )
