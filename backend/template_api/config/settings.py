"""Application settings read from the environment (and `.env` via python-dotenv).

`DEFAULTS` lists every recognised key. `create_app` copies the environment
values into `app.config`; callers (tests) may override any of them by passing
a dict to `create_app`. `load_settings` turns a config mapping into a typed
`SwaggerSettings` value and rejects malformed values at startup.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..openapi_parts.constants import GROUPING_MODES, GROUPING_PARTITION
from ..openapi_parts.filters import is_demo_document

DEFAULTS: Dict[str, str] = {
    'APP_NAME': 'Template API',
    'OPENAPI_TITLE': 'Template API',
    'OPENAPI_DEMO_TITLE': 'Demo API',
    'OPENAPI_VERSION': '1.0.0',
    'OPENAPI_DESCRIPTION': '',
    'SWAGGER_UI_ENABLE': 'true',
    'SWAGGER_SORT_ENDPOINTS': 'true',
    'SWAGGER_GROUPING_MODE': GROUPING_PARTITION,
    'SWAGGER_LIST': '[]',
    'API_KEYS': '',
    'DATABASE_URL': 'sqlite:///dev.db',
    'LOG_LEVEL': 'INFO',
}

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def env_config() -> Dict[str, str]:
    return {key: os.getenv(key, default) for key, default in DEFAULTS.items()}


def parse_bool(value: Any, key: str = 'value') -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f'{key} must be a boolean, got {value!r}')


def parse_api_keys(value: Any) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        items = str(value or '').split(',')
    return tuple(k.strip() for k in items if k and k.strip())


@dataclass(frozen=True)
class SwaggerEndpoint:
    name: str
    url: str


def parse_swagger_list(value: Any) -> List[SwaggerEndpoint]:
    if isinstance(value, str):
        try:
            value = json.loads(value or '[]')
        except json.JSONDecodeError as e:
            raise ValueError(f'SWAGGER_LIST must be a JSON list: {e}') from e
    if not isinstance(value, list):
        raise ValueError('SWAGGER_LIST must be a JSON list')
    out = []
    for entry in value:
        if isinstance(entry, SwaggerEndpoint):
            out.append(entry)
            continue
        if not isinstance(entry, dict) or not entry.get('name') or not entry.get('url'):
            raise ValueError(f'SWAGGER_LIST entry needs name and url: {entry!r}')
        out.append(SwaggerEndpoint(name=str(entry['name']), url=str(entry['url'])))
    return out


@dataclass(frozen=True)
class SwaggerSettings:
    app_name: str = DEFAULTS['APP_NAME']
    main_title: str = DEFAULTS['OPENAPI_TITLE']
    demo_title: str = DEFAULTS['OPENAPI_DEMO_TITLE']
    version: str = DEFAULTS['OPENAPI_VERSION']
    description: str = ''
    ui_enable: bool = True
    sort_endpoints: bool = True
    grouping_mode: str = GROUPING_PARTITION
    extra_endpoints: Tuple[SwaggerEndpoint, ...] = field(default_factory=tuple)

    @property
    def demo_label(self) -> str:
        return f'{self.app_name} Demo'

    def ui_endpoints(self) -> List[SwaggerEndpoint]:
        """Main, Demo, then configured extras sorted by name.

        Extras reusing the Main or Demo label are ignored.
        """
        reserved = {self.app_name, self.demo_label}
        extras = sorted((e for e in self.extra_endpoints if e.name not in reserved), key=lambda e: e.name)
        return [
            SwaggerEndpoint(self.app_name, '/swagger/Main/swagger.json'),
            SwaggerEndpoint(self.demo_label, '/swagger/Demo/swagger.json'),
            *extras,
        ]


def load_settings(config: Optional[Mapping[str, Any]] = None) -> SwaggerSettings:
    cfg: Dict[str, Any] = dict(DEFAULTS)
    if config:
        cfg.update({k: v for k, v in config.items() if k in DEFAULTS})
    mode = str(cfg['SWAGGER_GROUPING_MODE']).strip().lower()
    if mode not in GROUPING_MODES:
        raise ValueError(f'SWAGGER_GROUPING_MODE must be one of {", ".join(GROUPING_MODES)}, got {mode!r}')
    if not is_demo_document(cfg['OPENAPI_DEMO_TITLE']):
        raise ValueError(f'OPENAPI_DEMO_TITLE must contain "Demo", got {cfg["OPENAPI_DEMO_TITLE"]!r}')
    if is_demo_document(cfg['OPENAPI_TITLE']):
        raise ValueError(f'OPENAPI_TITLE must not contain "Demo", got {cfg["OPENAPI_TITLE"]!r}')
    return SwaggerSettings(
        app_name=cfg['APP_NAME'],
        main_title=cfg['OPENAPI_TITLE'],
        demo_title=cfg['OPENAPI_DEMO_TITLE'],
        version=cfg['OPENAPI_VERSION'],
        description=cfg['OPENAPI_DESCRIPTION'] or '',
        ui_enable=parse_bool(cfg['SWAGGER_UI_ENABLE'], 'SWAGGER_UI_ENABLE'),
        sort_endpoints=parse_bool(cfg['SWAGGER_SORT_ENDPOINTS'], 'SWAGGER_SORT_ENDPOINTS'),
        grouping_mode=mode,
        extra_endpoints=tuple(parse_swagger_list(cfg['SWAGGER_LIST'])),
    )


__all__ = [
    'DEFAULTS',
    'SwaggerEndpoint',
    'SwaggerSettings',
    'env_config',
    'load_settings',
    'parse_api_keys',
    'parse_bool',
    'parse_swagger_list',
]
