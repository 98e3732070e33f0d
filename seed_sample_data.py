from datetime import datetime, timedelta

from app.db import get_db_session, init_db
from app.logger import get_logger, setup_logging
from app.project_service import ProjectService
from app.repositories import ProjectRepository, StatusRepository, TaskRepository, UserRepository
from app.status_service import StatusService
from app.task_service import TaskService
from app.user_service import UserService
from schemas.auth import UserCreate
from schemas.project import ProjectCreate
from schemas.status import StatusCreate
from schemas.task import TaskCreate

logger = get_logger("seed")


def main() -> None:
    setup_logging()
    init_db()

    members = [
        ("alice", "alice*123"),
        ("bob", "bob*123"),
        ("carol", "carol*123"),
    ]

    statuses = ["todo", "in progress", "done"]

    tasks = [
        ("Draft API contract", "Agree on payload shapes for the board.", "done"),
        ("Implement task endpoints", "Create, update and delete tasks.", "in progress"),
        ("Write integration tests", "Cover the register-to-task flow.", "todo"),
        ("Set up CI", "Run the suite on every push.", "todo"),
    ]

    with get_db_session() as db:
        users = UserRepository(db)
        user_service = UserService(users)
        project_service = ProjectService(ProjectRepository(db), users)
        status_service = StatusService(StatusRepository(db), ProjectRepository(db), TaskRepository(db))
        task_service = TaskService(TaskRepository(db), ProjectRepository(db), StatusRepository(db), users)

        member_ids = []
        for name, password in members:
            existing = users.get_by_key(name)
            if existing is not None:
                member_ids.append(existing.id)
                continue
            user_id, _ = user_service.register(UserCreate(name=name, password=password))
            member_ids.append(user_id)

        project = project_service.create(ProjectCreate(name="Tracker launch", member_ids=member_ids))

        for name in statuses:
            status_service.create(StatusCreate(name=name, project_id=project.id))

        start = datetime.now().replace(microsecond=0)
        for index, (title, description, status) in enumerate(tasks):
            task_service.create(
                TaskCreate(
                    title=title,
                    description=description,
                    start_date=start + timedelta(days=index),
                    end_date=start + timedelta(days=index + 3),
                    status=status,
                    project_id=project.id,
                    assigner_id=member_ids[index % len(member_ids)],
                )
            )

        seeded = project_service.get(project.id)

    logger.info(f"Seeding complete: project {seeded.id} '{seeded.name}'")
    logger.info(f"Members: {[member.name for member in seeded.members]}")
    logger.info(f"Statuses: {[status.name for status in seeded.statuses]}")
    logger.info(f"Tasks: {[(task.id, task.title, task.status) for task in seeded.tasks]}")


if __name__ == "__main__":
    main()
