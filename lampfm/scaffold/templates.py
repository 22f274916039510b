"""Templates for scaffolded sites and Apache virtual hosts."""
from typing import Any, Dict

from jinja2 import BaseLoader, Environment, StrictUndefined

INDEX_PHP = """<?php
phpinfo();
"""

INDEX_PY = r"""#!/usr/bin/env python3
print("Content-Type: text/plain\n")
print("Hello from {{ name }}")
"""

VHOST_CONF = """<VirtualHost *:80>
  ServerName {{ domain }}
  DocumentRoot {{ document_root }}
  <Directory {{ document_root }}>
    Options Indexes FollowSymLinks
    AllowOverride All
    Require all granted
  </Directory>
  ErrorLog {{ log_dir }}/{{ domain }}.error.log
  CustomLog {{ log_dir }}/{{ domain }}.access.log combined
</VirtualHost>
"""

TEMPLATES = {
    "index.php": INDEX_PHP,
    "index.py": INDEX_PY,
    "vhost.conf": VHOST_CONF,
}


class TemplateEngine:
    """Renders the built-in templates.

    Values are substituted verbatim: no HTML/shell escaping is applied.
    """

    def __init__(self):
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a built-in template with given context.

        Raises:
            KeyError: Unknown template name
        """
        return self.env.from_string(TEMPLATES[template_name]).render(**context)
