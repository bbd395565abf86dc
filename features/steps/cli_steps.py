import io
import json

from behave import given, when, then

from streamstats.cli import main


def _stdin(context):
    if context.stdin_bytes is not None:
        return io.TextIOWrapper(io.BytesIO(context.stdin_bytes), encoding="utf-8")
    return io.StringIO(context.stdin_text)


def _run(context, argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    try:
        context.exit_code = main(
            argv=argv,
            stdin=_stdin(context),
            stdout=stdout,
            stderr=stderr,
            env=context.env,
        )
    except SystemExit as e:
        # argparse usage errors
        context.exit_code = e.code
    context.stdout_text = stdout.getvalue()
    context.stderr_text = stderr.getvalue()


def _expand(context, text: str) -> str:
    return text.replace("{workdir}", str(context.workdir))


@given("standard input containing")
def step_stdin_docstring(context):
    context.stdin_text = context.text or ""


@given('standard input "{text}"')
def step_stdin_inline(context, text):
    context.stdin_text = text


@given('standard input with the raw bytes "{hex_bytes}"')
def step_stdin_raw_bytes(context, hex_bytes):
    context.stdin_bytes = bytes.fromhex(hex_bytes)


@given("empty standard input")
def step_stdin_empty(context):
    context.stdin_text = ""


@given('a file "{name}" containing "{text}"')
def step_file_inline(context, name, text):
    (context.workdir / name).write_text(text, encoding="utf-8")


@given('a file "{name}" with content')
def step_file_docstring(context, name):
    (context.workdir / name).write_text(_expand(context, context.text or ""), encoding="utf-8")


@given('a file "{name}" with the raw bytes "{hex_bytes}"')
def step_file_raw_bytes(context, name, hex_bytes):
    (context.workdir / name).write_bytes(bytes.fromhex(hex_bytes))


@given('the environment variable "{key}" is "{value}"')
def step_env_var(context, key, value):
    context.env[key] = _expand(context, value)


@when("I run the statistics tool")
def step_run_tool(context):
    _run(context, [])


@when('I run the statistics tool with arguments "{args}"')
def step_run_tool_args(context, args):
    _run(context, [_expand(context, a) for a in args.split()])


@then("the exit code should be {code:d}")
def step_exit_code(context, code):
    assert context.exit_code == code, (
        f"exit code {context.exit_code} != {code}\nstdout:\n{context.stdout_text}\nstderr:\n{context.stderr_text}"
    )


@then("the output should be")
def step_output_exact(context):
    expected = (context.text or "").strip("\n") + "\n"
    assert context.stdout_text == expected, f"stdout was:\n{context.stdout_text!r}\nexpected:\n{expected!r}"


@then("the output should be empty")
def step_output_empty(context):
    assert context.stdout_text == "", f"stdout was: {context.stdout_text!r}"


@then('the error output should be "{message}"')
def step_stderr_exact(context, message):
    assert context.stderr_text.strip() == message, f"stderr was: {context.stderr_text!r}"


@then('the error output should contain "{fragment}"')
def step_stderr_contains(context, fragment):
    assert fragment in context.stderr_text, f"stderr was: {context.stderr_text!r}"


@then("the error output should be empty")
def step_stderr_empty(context):
    assert context.stderr_text == "", f"stderr was: {context.stderr_text!r}"


@then('the JSON report field "{key}" should be {expected}')
def step_json_field(context, key, expected):
    report = json.loads(context.stdout_text)
    assert report[key] == json.loads(expected), f"{key}={report[key]!r}, expected {expected}"


@then('the JSON statistic "{name}" should be {expected}')
def step_json_statistic(context, name, expected):
    report = json.loads(context.stdout_text)
    actual = report["statistics"][name]
    want = json.loads(expected)
    if want is None or actual is None:
        assert actual == want, f"{name}={actual!r}, expected {want!r}"
    else:
        assert abs(actual - want) < 1e-9, f"{name}={actual!r}, expected {want!r}"


@then("the JSON statistics should be listed as {names}")
def step_json_statistic_order(context, names):
    report = json.loads(context.stdout_text)
    expected = [n.strip() for n in names.split(",")]
    assert list(report["statistics"]) == expected, f"{list(report['statistics'])}"
