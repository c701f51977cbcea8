"""Response envelope, exception handler, pagination and health endpoints."""
from unittest import mock

import pytest
from django.db import IntegrityError
from rest_framework import exceptions as drf_exceptions
from rest_framework.test import APIRequestFactory

from common.exceptions import api_exception_handler
from common.responses import api_response, error_response
from core.exceptions import ConflictError, NotFoundError, ValidationError
from tests.conftest import make_room


def handle(exc):
    request = APIRequestFactory().get('/')
    return api_exception_handler(exc, {'request': request})


class TestEnvelopeHelpers:

    def test_api_response(self):
        response = api_response({'a': 1}, message='ok', status=201)
        assert response.status_code == 201
        assert response.data == {'success': True, 'message': 'ok', 'data': {'a': 1}}

    def test_error_response_omits_empty_errors(self):
        assert error_response('bad').data == {'success': False, 'message': 'bad'}


class TestExceptionHandler:

    def test_application_exception(self):
        response = handle(ValidationError(message='Invalid discount', details={'discount': ['too big']}))
        assert response.status_code == 400
        assert response.data == {'success': False, 'message': 'Invalid discount', 'errors': {'discount': ['too big']}}

    def test_status_codes_follow_exception(self):
        assert handle(NotFoundError(resource_type='Room')).status_code == 404
        assert handle(ConflictError('dup')).status_code == 409

    def test_drf_validation_error(self):
        response = handle(drf_exceptions.ValidationError({'name': ['This field is required.']}))
        assert response.status_code == 400
        assert response.data['message'] == 'Validation failed'
        assert response.data['errors'] == {'name': ['This field is required.']}

    def test_integrity_error_is_conflict(self):
        assert handle(IntegrityError('unique')).status_code == 409

    def test_unexpected_error_is_500(self, settings):
        settings.DEBUG = False
        response = handle(RuntimeError('kaboom'))
        assert response.status_code == 500
        assert response.data == {'success': False, 'message': 'kaboom'}

    def test_trace_included_in_debug(self, settings):
        settings.DEBUG = True
        assert 'trace' in handle(RuntimeError('kaboom')).data


@pytest.mark.django_db
class TestEndpointEnvelope:

    def test_list_is_paginated_envelope(self, client_for, owner, prop):
        for number in ('1', '2', '3'):
            make_room(prop, room_number=number)
        response = client_for(owner).get('/api/rooms', {'limit': 2})
        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['count'] == 3
        assert len(response.data['data']) == 2
        assert response.data['next'] is not None

    def test_retrieve_is_wrapped(self, client_for, owner, room):
        response = client_for(owner).get(f'/api/rooms/{room.id}')
        assert response.data['success'] is True
        assert response.data['data']['room_number'] == room.room_number

    def test_serializer_errors(self, client_for, owner, prop):
        response = client_for(owner).post('/api/rooms', {'property': prop.id}, format='json')
        assert response.status_code == 400
        assert response.data['success'] is False
        assert 'room_number' in response.data['errors']

    def test_bad_filter_value(self, client_for, owner, room):
        response = client_for(owner).get('/api/rooms', {'property': 'abc'})
        assert response.status_code == 400
        assert response.data['message'] == 'Invalid filter value'

    def test_request_id_header(self, client_for, owner):
        response = client_for(owner).get('/api/rooms')
        assert len(response['X-Request-ID']) == 8

    def test_request_id_from_caller_is_kept(self, client_for, owner):
        response = client_for(owner).get('/api/rooms', HTTP_X_REQUEST_ID='abc-12345')
        assert response['X-Request-ID'] == 'abc-12345'

    def test_unsafe_request_id_is_replaced(self, client_for, owner):
        response = client_for(owner).get('/api/rooms', HTTP_X_REQUEST_ID='bad id!')
        assert response['X-Request-ID'] != 'bad id!'
        assert len(response['X-Request-ID']) == 8


@pytest.mark.django_db
class TestHealth:

    def test_health(self, api_client):
        response = api_client.get('/api/health')
        assert response.status_code == 200
        assert response.json()['success'] is True

    def test_readiness_reports_database_failure(self, api_client):
        with mock.patch('common.health.connection') as connection:
            connection.cursor.side_effect = Exception('down')
            response = api_client.get('/api/health/ready/')
        assert response.status_code == 503
        body = response.json()
        assert body['success'] is False
        assert body['data']['checks'] == {'database': False, 'cache': True}

    def test_readiness_ok_reports_scheduler(self, api_client, settings):
        settings.ENABLE_BACKGROUND_SCHEDULER = False
        response = api_client.get('/api/health/ready/')
        assert response.status_code == 200
        assert response.json()['data']['scheduler'] == 'disabled'
