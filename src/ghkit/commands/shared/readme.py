"""
Skeleton README for freshly created repositories.
"""

from ghkit.constants import APP_NAME, APP_URL, DEFAULT_WEB_BASE_URL

README_FILE_NAME = "README.md"

README_TEMPLATE = """# {repo_name}
**{description}**
[GitHub]({web_url}/{username}/{repo_name})

## Motivation
Add motivation here

## Installation
`add_installation_command_here`

## Usage
Add usage & examples here

## Development
### TODO:
- [x] Create project & repo
- [ ] Fill out that TODO list
- [ ] Fill out the Motivation section
- [ ] Fill out the Installation section
- [ ] Fill out the Usage section

## Credits:
- Local and remote (online) repo created from command line by [{app_name}]({app_url})
"""


def render_readme(username: str, repo_name: str, description: str) -> str:
    return README_TEMPLATE.format(
        repo_name=repo_name,
        description=description,
        username=username,
        web_url=DEFAULT_WEB_BASE_URL,
        app_name=APP_NAME,
        app_url=APP_URL,
    )
