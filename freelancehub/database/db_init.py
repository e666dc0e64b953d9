# freelancehub/database/db_init.py
import logging

from freelancehub.config import Settings
from freelancehub.database import models
from freelancehub.domain import UserRole, ProjectStatus
from freelancehub.repositories.factory import RepositoryProvider, build_repository_provider

logger = logging.getLogger(__name__)

DEMO_ADMIN = {
    "email": "admin@freelancehub.com",
    "password": "admin123",
    "name": "Admin User",
    "role": UserRole.ADMIN.value,
}
DEMO_CLIENT = {
    "email": "client@example.com",
    "password": "client123",
    "name": "Demo Client",
    "role": UserRole.CLIENT.value,
}
DEMO_PROJECT = {
    "name": "Website Redesign",
    "description": "Complete redesign of company website with modern UI/UX",
    "status": ProjectStatus.IN_PROGRESS.value,
    "completion_percentage": 75,
    "notes": "Please review the latest mockups and provide feedback on the color scheme.",
}


def initialize_db(provider: RepositoryProvider, seed_demo_data: bool = True) -> None:
    """
    테이블을 생성하고, 기본 관리자/데모 클라이언트/데모 프로젝트를 삽입합니다.
    이미 존재하는 데이터는 건너뛰므로 여러 번 실행해도 안전합니다.
    """
    logger.info("Initializing %s storage...", provider.backend)
    provider.create_schema()

    if not seed_demo_data:
        logger.info("Demo data seeding disabled.")
        return

    with provider.session() as (user_repo, project_repo):
        if not user_repo.find_by_email(DEMO_ADMIN["email"]):
            user_repo.create(models.User(**DEMO_ADMIN))
            logger.info("Seeded admin user %s", DEMO_ADMIN["email"])

        client = user_repo.find_by_email(DEMO_CLIENT["email"])
        if not client:
            client = user_repo.create(models.User(**DEMO_CLIENT))
            logger.info("Seeded demo client %s", DEMO_CLIENT["email"])

        existing = project_repo.list_by_client_id(client.id)
        if not any(p.name == DEMO_PROJECT["name"] for p in existing):
            project_repo.create(models.Project(client_id=client.id, **DEMO_PROJECT))
            logger.info("Seeded demo project '%s'", DEMO_PROJECT["name"])


if __name__ == '__main__':
    from freelancehub.logging_config import configure_logging

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.uses_database:
        raise SystemExit("DATABASE_URL is not set; nothing to initialize for in-memory storage.")
    initialize_db(build_repository_provider(settings.database_url), seed_demo_data=settings.seed_demo_data)
