"""URI template compilation and matching.

Supported placeholder styles:
    query   "scheme:name?key={param}&other={param2}"  extracted by key
    path    "scheme:name/{param}/{param2}"             extracted by position

Matching is prefix based: a URI matches when its part before "?" equals the
template's fixed prefix (path templates: starts with it). Parameters missing
from the URI are reported as None rather than failing the match, so the bound
handler can answer with a descriptive message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qsl, unquote_plus

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

Params = dict[str, str | None]


@dataclass(frozen=True, slots=True)
class UriTemplate:
    """A compiled URI template.

    Example:
        >>> t = UriTemplate.compile("resource-template:install?packageManager={pm}&component={c}")
        >>> t.match("resource-template:install?packageManager=pnpm&component=date%20picker")
        {'pm': 'pnpm', 'c': 'date picker'}
        >>> t.match("resource-template:install?packageManager=npm")
        {'pm': 'npm', 'c': None}
        >>> t.match("resource:other") is None
        True
    """

    template: str
    prefix: str
    query_params: tuple[tuple[str, str], ...] = ()  # (query key, param name)
    path_params: tuple[str, ...] = ()

    @classmethod
    def compile(cls, template: str) -> UriTemplate:
        base, _, query = template.partition("?")
        first = base.find("{")
        prefix = base if first < 0 else base[:first]

        path_params = tuple(_PLACEHOLDER.findall(base[len(prefix):]))
        query_params = []
        for part in filter(None, query.split("&")):
            key, _, value = part.partition("=")
            if m := _PLACEHOLDER.fullmatch(value):
                query_params.append((key, m.group(1)))
        return cls(template=template, prefix=prefix, query_params=tuple(query_params), path_params=path_params)

    @property
    def params(self) -> tuple[str, ...]:
        return self.path_params + tuple(name for _, name in self.query_params)

    def match(self, uri: str) -> Params | None:
        """Extracted (URL-decoded) parameters, or None when the prefix differs."""
        path, _, query = uri.partition("?")
        params: Params = {}

        if self.path_params:
            if not path.startswith(self.prefix):
                return None
            rest = path[len(self.prefix):].strip("/")
            segments = rest.split("/") if rest else []
            if len(segments) > len(self.path_params):
                return None
            for i, name in enumerate(self.path_params):
                params[name] = (unquote_plus(segments[i]) or None) if i < len(segments) else None
        elif path != self.prefix:
            return None

        if self.query_params:
            found: dict[str, str] = {}
            for key, value in parse_qsl(query, keep_blank_values=True):
                found.setdefault(key, value)
            for key, name in self.query_params:
                params[name] = found.get(key) or None
        return params
