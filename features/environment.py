import shutil
import tempfile
from pathlib import Path


def before_scenario(context, scenario):
    # Reset per scenario
    context.workdir = Path(tempfile.mkdtemp(prefix="streamstats-"))
    context.stdin_text = ""
    context.stdin_bytes = None
    context.env = {}
    context.exit_code = None
    context.stdout_text = ""
    context.stderr_text = ""
    context.metrics = None


def after_scenario(context, scenario):
    shutil.rmtree(context.workdir, ignore_errors=True)
