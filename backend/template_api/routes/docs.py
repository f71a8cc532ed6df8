import json
from flask import Blueprint, abort, current_app
from ..openapi import build_openapi_spec
from ..openapi_parts.constants import DOC_MAIN, DOC_NAMES

docs_bp = Blueprint('docs', __name__)

_UI_PAGE = (
    "<!DOCTYPE html><html><head><title>{title}</title>"
    "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui.css\" />"
    "</head><body><div id=\"swagger-ui\"></div>"
    "<script src=\"https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-bundle.js\"></script>"
    "<script src=\"https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-standalone-preset.js\"></script>"
    "<script>window.ui = SwaggerUIBundle({{urls: {urls}, dom_id: '#swagger-ui', "
    "presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset], layout: 'StandaloneLayout'}});</script>"
    "</body></html>"
)


@docs_bp.get('/swagger/<doc_name>/swagger.json')
def swagger_document(doc_name):
    if doc_name not in DOC_NAMES:
        abort(404, description=f'Unknown API document {doc_name}')
    return build_openapi_spec(current_app, doc_name)


@docs_bp.get('/openapi.json')
def openapi_spec():
    return build_openapi_spec(current_app, DOC_MAIN)


@docs_bp.get('/docs')
def docs_index():
    settings = current_app.extensions['swagger_settings']
    urls = json.dumps([{'name': e.name, 'url': e.url} for e in settings.ui_endpoints()])
    return _UI_PAGE.format(title=f'[SUI] {settings.app_name}', urls=urls)
