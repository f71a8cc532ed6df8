import pytest
from template_api.openapi_parts.document import (
    Document,
    DocumentError,
    DuplicateOperationError,
    DuplicatePathError,
    Operation,
    PathItem,
)
from tests.test_doc_helpers import make_document, make_path_item

RAW = {
    'openapi': '3.0.3',
    'info': {'title': 'Template API', 'version': '2.1.0', 'x-logo': {'url': '/logo.png'}},
    'paths': {
        '/api/users/{user_id}': {
            'parameters': [{'name': 'user_id', 'in': 'path', 'required': True, 'schema': {'type': 'integer'}}],
            'get': {'operationId': 'get_user', 'tags': ['Users', 'Users'], 'responses': {'200': {'description': 'OK'}}},
            'delete': {'operationId': 'delete_user', 'x-required-permissions': ['ADMIN'], 'responses': {}},
        },
    },
    'components': {'securitySchemes': {'ApiKey': {'type': 'apiKey', 'in': 'header', 'name': 'X-API-Key'}}},
    'tags': [{'name': 'Users', 'description': 'User endpoints'}],
}


def test_from_dict_reads_model_fields():
    doc = Document.from_dict(RAW)
    assert doc.title == 'Template API'
    item = doc.paths['/api/users/{user_id}']
    assert list(item.operations) == ['get', 'delete']
    assert item.operations['get'].tags == ['Users']
    assert item.operations['delete'].tags == []
    assert item.extra['parameters'][0]['name'] == 'user_id'
    assert doc.tags[0].description == 'User endpoints'


def test_to_dict_carries_opaque_metadata():
    out = Document.from_dict(RAW).to_dict()
    assert out['openapi'] == '3.0.3'
    assert out['info']['x-logo'] == {'url': '/logo.png'}
    assert out['components'] == RAW['components']
    op = out['paths']['/api/users/{user_id}']['delete']
    assert op['x-required-permissions'] == ['ADMIN']
    assert 'tags' not in op
    assert out['paths']['/api/users/{user_id}']['get']['tags'] == ['Users']
    assert out['tags'] == [{'name': 'Users', 'description': 'User endpoints'}]


def test_missing_title_reads_as_empty():
    doc = Document.from_dict({'paths': {}})
    assert doc.title == ''
    assert Document(title=None).title == ''


def test_non_mapping_paths_rejected():
    with pytest.raises(DocumentError):
        Document.from_dict({'info': {'title': 'x'}, 'paths': ['/a']})


def test_duplicate_path_key_fails_fast():
    doc = make_document('Main API', {'/a': {'get': []}})
    with pytest.raises(DuplicatePathError) as exc:
        doc.add_path('/a', PathItem())
    assert exc.value.path_key == '/a'
    with pytest.raises(DuplicatePathError):
        doc.replace_paths([('/b', PathItem()), ('/b', PathItem())])
    # failed replacement leaves the mapping untouched
    assert list(doc.paths) == ['/a']
    with pytest.raises(DuplicatePathError):
        Document(title='Main API', paths=[('/x', PathItem()), ('/x', PathItem())])


def test_duplicate_operation_rejected():
    item = make_path_item({'get': []})
    with pytest.raises(DuplicateOperationError):
        item.add_operation(Operation(method='get'), '/a')
    with pytest.raises(DuplicateOperationError):
        PathItem.from_dict({'get': {}, 'GET': {}})


def test_duplicate_errors_are_value_errors():
    assert issubclass(DuplicatePathError, DocumentError)
    assert issubclass(DocumentError, ValueError)


def test_add_tag_keeps_names_unique():
    op = Operation(method='get')
    op.add_tag('A')
    op.add_tag('B')
    op.add_tag('A')
    assert op.tags == ['A', 'B']


def test_copy_is_independent():
    doc = Document.from_dict(RAW)
    clone = doc.copy()
    clone.paths['/api/users/{user_id}'].operations['delete'].add_tag('X')
    clone.info['title'] = 'Other'
    assert doc.paths['/api/users/{user_id}'].operations['delete'].tags == []
    assert doc.title == 'Template API'


def test_untitled_document_renders_empty_title():
    out = Document(title=None).to_dict()
    assert out['info'] == {'version': '1.0.0', 'title': ''}
    assert Document.from_dict({'info': {'title': None}, 'paths': {}}).to_dict()['info']['title'] == ''


def test_constructor_tags_are_an_ordered_set():
    op = Operation(method='get', tags=['B', 'A', 'B', 'A'])
    assert op.tags == ['B', 'A']
