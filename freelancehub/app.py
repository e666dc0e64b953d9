# freelancehub/app.py
from wsgiref.simple_server import make_server
import json
import logging
import re
import sys

import pydantic

from freelancehub.config import Settings
from freelancehub.database.db_init import initialize_db
from freelancehub.logging_config import configure_logging
from freelancehub.repositories.exceptions import DuplicateEmailError
from freelancehub.repositories.factory import RepositoryProvider, build_repository_provider
from freelancehub.schemas import (
    LoginRequest, SignupRequest, ProjectCreateRequest, ProjectUpdateRequest, DriveLinkRequest,
)
from freelancehub.services.auth_service import AuthService
from freelancehub.services.project_service import ProjectService
from freelancehub.services.exceptions import *

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        return json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValidationError("Invalid or missing JSON body.")

def parse_body(environ, schema):
    """JSON 본문을 읽어 스키마로 검증합니다. 실패 시 상세 내용은 로그에만 남깁니다."""
    data = get_request_data(environ)
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object.")
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        logger.debug("Request validation failed for %s: %s", schema.__name__, e.errors())
        raise ValidationError(f"Invalid {schema.__name__}.") from e

def handle_exception(e, failure_message):
    """
    예외를 HTTP 상태와 응답 본문으로 변환합니다.
    예상하지 못한 예외는 원인을 서버 로그에만 남기고 고정된 메시지를 반환합니다.
    """
    error_map = [
        (ValidationError, "400 Bad Request", "Invalid request data"),
        (AuthenticationError, "401 Unauthorized", "Invalid credentials"),
        (ProjectNotFoundError, "404 Not Found", "Project not found"),
        (UserNotFoundError, "404 Not Found", "Client not found"),
        (UserAlreadyExistsError, "409 Conflict", "User already exists"),
        (DuplicateEmailError, "409 Conflict", "User already exists"),
    ]
    for exc_type, status, message in error_map:
        if isinstance(e, exc_type):
            return status, json.dumps({"message": message})

    logger.exception("Unhandled error: %s", failure_message)
    return "500 Internal Server Error", json.dumps({"message": failure_message})

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

# 인증 (세션/토큰 없음)
def login_handler(environ, *args):
    data = parse_body(environ, LoginRequest)
    result = environ['services']['auth'].login(data.email, data.password)
    return '200 OK', json.dumps(result)

def signup_handler(environ, *args):
    data = parse_body(environ, SignupRequest)
    result = environ['services']['auth'].signup(data.email, data.password, data.name, data.role)
    return '201 Created', json.dumps(result)

# 클라이언트
def my_projects_handler(environ, client_id):
    # 경로의 clientId 를 그대로 신뢰합니다. (서버 측 본인 확인 없음)
    projects = environ['services']['projects'].list_client_projects(int(client_id))
    return '200 OK', json.dumps(projects)

def get_project_handler(environ, project_id):
    project = environ['services']['projects'].get_project(int(project_id))
    return '200 OK', json.dumps(project)

def drive_link_handler(environ, project_id):
    data = parse_body(environ, DriveLinkRequest)
    project = environ['services']['projects'].submit_drive_link(int(project_id), data.driveLink)
    return '200 OK', json.dumps(project)

# 관리자
def admin_list_projects_handler(environ, *args):
    projects = environ['services']['projects'].list_projects_with_clients()
    return '200 OK', json.dumps(projects)

def admin_list_clients_handler(environ, *args):
    clients = environ['services']['projects'].list_clients()
    return '200 OK', json.dumps(clients)

def admin_get_client_handler(environ, client_id):
    client = environ['services']['projects'].get_client_with_projects(int(client_id))
    return '200 OK', json.dumps(client)

def admin_clients_with_projects_handler(environ, *args):
    clients = environ['services']['projects'].list_clients_with_projects()
    return '200 OK', json.dumps(clients)

def admin_create_project_handler(environ, *args):
    data = parse_body(environ, ProjectCreateRequest)
    project = environ['services']['projects'].create_project(
        name=data.name,
        description=data.description,
        client_id=data.clientId,
        status=data.status,
        completion_percentage=data.completionPercentage,
        notes=data.notes,
    )
    return '201 Created', json.dumps(project)

def admin_update_project_handler(environ, project_id):
    data = parse_body(environ, ProjectUpdateRequest)
    changes = {field: getattr(data, field) for field in data.model_fields_set}
    project = environ['services']['projects'].update_project(int(project_id), changes)
    return '200 OK', json.dumps(project)

def admin_delete_project_handler(environ, project_id):
    environ['services']['projects'].delete_project(int(project_id))
    return '204 No Content', ''

def admin_stats_handler(environ, *args):
    stats = environ['services']['projects'].get_stats()
    return '200 OK', json.dumps(stats)

ID = r'([1-9][0-9]*)'

# (메서드, 경로 패턴, 핸들러, 실패 시 메시지)
ROUTES = [
    ('POST', r'^/api/auth/login$', login_handler, "Failed to log in"),
    ('POST', r'^/api/auth/signup$', signup_handler, "Failed to sign up"),
    ('GET', rf'^/api/projects/my/{ID}$', my_projects_handler, "Failed to fetch projects"),
    ('GET', rf'^/api/projects/{ID}$', get_project_handler, "Failed to fetch project"),
    ('PATCH', rf'^/api/projects/{ID}/drive-link$', drive_link_handler, "Failed to update drive link"),
    ('GET', r'^/api/admin/projects$', admin_list_projects_handler, "Failed to fetch projects"),
    ('POST', r'^/api/admin/projects$', admin_create_project_handler, "Failed to create project"),
    ('PATCH', rf'^/api/admin/projects/{ID}$', admin_update_project_handler, "Failed to update project"),
    ('DELETE', rf'^/api/admin/projects/{ID}$', admin_delete_project_handler, "Failed to delete project"),
    ('GET', r'^/api/admin/clients$', admin_list_clients_handler, "Failed to fetch clients"),
    ('GET', rf'^/api/admin/clients/{ID}$', admin_get_client_handler, "Failed to fetch client"),
    ('GET', r'^/api/admin/clients-with-projects$', admin_clients_with_projects_handler, "Failed to fetch clients"),
    ('GET', r'^/api/admin/stats$', admin_stats_handler, "Failed to fetch stats"),
]

def match_route(method, path):
    """
    (handler, path_args, failure_message, allowed_methods) 를 반환합니다.
    경로는 맞지만 메서드가 다르면 handler 는 None 이고 allowed_methods 가 채워집니다.
    """
    allowed = []
    for route_method, pattern, route_handler, failure_message in ROUTES:
        if match := re.match(pattern, path):
            if method == route_method:
                return route_handler, match.groups(), failure_message, []
            allowed.append(route_method)
    return None, (), None, allowed

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_app(provider: RepositoryProvider = None):
    """
    WSGI 애플리케이션을 생성합니다.

    Args:
        provider: 요청마다 리포지토리를 만들어 줄 팩토리. 생략하면 환경 변수 설정으로 생성하고
            스키마 생성 및 기본 데이터 삽입까지 수행합니다.
    """
    if provider is None:
        settings = Settings.from_env()
        provider = build_repository_provider(settings.database_url)
        initialize_db(provider, seed_demo_data=settings.seed_demo_data)

    def application(environ, start_response):
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")
        headers = [("Content-Type", "application/json")]

        handler, path_args, failure_message, allowed = match_route(method, path)
        if handler is None:
            if allowed:
                status, response_body = '405 Method Not Allowed', json.dumps({'message': 'Method Not Allowed'})
                headers.append(("Allow", ", ".join(allowed)))
            else:
                status, response_body = '404 Not Found', json.dumps({'message': 'Not Found'})
        else:
            try:
                with provider.session() as (user_repo, project_repo):
                    # 1. 의존성 생성 (Repositories -> Services)
                    environ['services'] = {
                        'auth': AuthService(user_repo),
                        'projects': ProjectService(user_repo, project_repo),
                    }
                    # 2. 핸들러 실행
                    status, response_body = handler(environ, *path_args)
            except Exception as e:
                status, response_body = handle_exception(e, failure_message)

        logger.debug("%s %s -> %s", method, path, status)
        start_response(status, headers)
        return [response_body.encode("utf-8")] if response_body else [b""]

    application.provider = provider
    return application

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    try:
        provider = build_repository_provider(settings.database_url)
        initialize_db(provider, seed_demo_data=settings.seed_demo_data)
        application = create_app(provider)
        with make_server(settings.host, settings.port, application) as httpd:
            logger.info("Serving FreelanceHub API on port %s...", settings.port)
            httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    except Exception as e:
        logger.exception("Error starting server: %s", e)
        sys.exit(1)

if __name__ == "__main__":
    main()
