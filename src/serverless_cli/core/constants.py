"""Shared constants for project setup and configuration loading."""

# Base location of the curated example templates
EXAMPLES_REPO_URL = "https://github.com/serverless/examples/tree/master"

# Leftover file shipped by some templates, removed after project creation
TEMPLATE_MARKER_FILENAME = "serverless.template.yml"

# Package manager manifest; its presence triggers dependency installation
PACKAGE_MANIFEST_FILENAME = "package.json"

# Service configuration file names, in lookup order
CONFIGURATION_FILENAMES = (
    "serverless.yml",
    "serverless.yaml",
    "serverless.json",
)

# Directories never copied from a local template
IGNORED_TEMPLATE_DIRECTORIES = {"node_modules", ".git", ".serverless"}

# Options that only make sense when creating a new service
SETUP_ONLY_OPTIONS = ("name", "template-path", "template", "template-url")

# Mutually exclusive template source options
TEMPLATE_SOURCE_OPTIONS = ("template-path", "template", "template-url")
