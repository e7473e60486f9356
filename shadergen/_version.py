"""
Versioning for shadergen. The version number is hard-coded. In a git checkout
the commit hash is added as a local version label.
"""

import logging
import subprocess
from pathlib import Path


# This is the reference version number, to be bumped before each release.
__version__ = "0.3.0"

version_info = tuple(int(i) for i in __version__.split("."))


logger = logging.getLogger("shadergen")

repo_dir = Path(__file__).parents[1]


def get_git_label():
    """Get the short commit hash of the checkout, or None if this is not a repo."""
    if not repo_dir.joinpath(".git").is_dir():
        return None
    command = ["git", "rev-parse", "--short", "HEAD"]
    try:
        p = subprocess.run(command, cwd=repo_dir, capture_output=True)
    except OSError as err:
        logger.warning(f"Could not get shadergen version: {err}")
        return None
    if p.returncode:
        stderr = p.stderr.decode(errors="ignore").strip()
        logger.warning(f"Could not get shadergen version: {stderr}")
        return None
    return p.stdout.decode(errors="ignore").strip() or None


label = get_git_label()
if label:
    __version__ += "+" + label
