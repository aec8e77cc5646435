"""Curated project templates offered by the interactive setup."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import EXAMPLES_REPO_URL

OTHER_CHOICE = "other"

# Visible rows in the template picker
PROJECT_TYPE_PAGE_SIZE = 13


@dataclass(frozen=True)
class ProjectChoice:
    """A selectable template: display label and template identifier."""

    label: str
    value: str


PROJECT_CHOICES: list[ProjectChoice] = [
    ProjectChoice("AWS - Node.js - Empty", "aws-node"),
    ProjectChoice("AWS - Node.js - REST API", "aws-node-rest-api"),
    ProjectChoice("AWS - Node.js - Scheduled Task", "aws-node-scheduled-cron"),
    ProjectChoice("AWS - Node.js - SQS Worker", "aws-node-sqs-worker"),
    ProjectChoice("AWS - Node.js - Express API", "aws-node-express-api"),
    ProjectChoice("AWS - Node.js - Express API with DynamoDB", "aws-node-express-dynamodb-api"),
    ProjectChoice("AWS - Python - Empty", "aws-python"),
    ProjectChoice("AWS - Python - REST API", "aws-python-rest-api"),
    ProjectChoice("AWS - Python - Scheduled Task", "aws-python-scheduled-cron"),
    ProjectChoice("AWS - Python - SQS Worker", "aws-python-sqs-worker"),
    ProjectChoice("AWS - Python - Flask API", "aws-python-flask-api"),
    ProjectChoice("AWS - Python - Flask API with DynamoDB", "aws-python-flask-dynamodb-api"),
    ProjectChoice("Other", OTHER_CHOICE),
]


def template_url(template: str) -> str:
    """Repository URL of a named example template."""
    return f"{EXAMPLES_REPO_URL}/{template}"
