"""Asynchronous dispatch of logins through Celery.

The task carries LoginParameters as plain keyword arguments, so any
broker serializer can transport it.
"""

import logging
from typing import Any

from celery import Celery

from auth_log.schema import LoginParameters
from auth_log.service import LoginService

logger = logging.getLogger(__name__)

TASK_NAME = "auth_log.login"


def register_login_task(
    celery_app: Celery,
    login_service: LoginService,
    name: str = TASK_NAME,
) -> Any:
    """Register the task that replays a login on a worker.
    
    Args:
        celery_app: Application the task is registered on.
        login_service: Service executing the login on the worker.
        name: Task name.
        
    Returns:
        The registered Celery task.
    """

    @celery_app.task(name=name)
    def handle_login(**payload: Any) -> None:
        parameters = LoginParameters.model_validate(payload)
        logger.info(f"Processing queued login for {parameters.user_identifier}")
        login_service.handle(parameters)

    return handle_login


class CeleryDispatcher:
    """Enqueues LoginParameters on a Celery task."""

    def __init__(self, task: Any):
        self.task = task

    def __call__(self, parameters: LoginParameters) -> None:
        self.task.delay(**parameters.model_dump())
