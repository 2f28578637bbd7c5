import pytest
from pydantic import ValidationError

from edu_api.routes.course_routes import CreateCourseRequest, UpdateCourseRequest

CS101 = {'name': 'CS101', 'description': 'Intro', 'instructor': 'A. Smith'}


def test_create_course_request_requires_name() -> None:
    with pytest.raises(ValidationError):
        CreateCourseRequest(name='   ')


def test_update_course_request_rejects_null_name() -> None:
    with pytest.raises(ValidationError):
        UpdateCourseRequest(name=None)


def test_create_course_returns_created_course(client) -> None:
    response = client.post('/courses', json=CS101)

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body['id'], int)
    assert {key: body[key] for key in CS101} == CS101


def test_delete_course_then_delete_again_returns_not_found(client) -> None:
    course_id = client.post('/courses', json=CS101).json()['id']

    first = client.delete(f'/courses/{course_id}/delete')
    second = client.delete(f'/courses/{course_id}/delete')

    assert first.status_code == 204
    assert first.content == b''
    assert second.status_code == 404
    assert second.json() == {'error': 'Course not found.'}


def test_list_courses_returns_created_courses(client) -> None:
    client.post('/courses', json=CS101)
    client.post('/courses', json={'name': 'CS102'})

    response = client.get('/courses')

    assert response.status_code == 200
    assert [course['name'] for course in response.json()] == ['CS101', 'CS102']


def test_update_course_changes_only_given_fields(client) -> None:
    course_id = client.post('/courses', json=CS101).json()['id']

    response = client.patch(f'/courses/{course_id}/update', json={'instructor': 'B. Jones'})

    assert response.status_code == 200
    assert response.json() == {
        'id': course_id,
        'name': 'CS101',
        'description': 'Intro',
        'instructor': 'B. Jones',
    }


def test_update_course_returns_not_found_for_unknown_course(client) -> None:
    response = client.patch('/courses/999/update', json={'name': 'CS999'})

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found.'}
