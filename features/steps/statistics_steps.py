import math

from behave import given, when, then

from streamstats.bench.metrics import Max, Mean, Metrics, Min, Percentile


def _values(text: str) -> list[float]:
    return [float(tok) for tok in text.split()]


def _result(metrics: Metrics, name: str) -> float:
    for r in metrics.evaluate():
        if r.name == name:
            return r.value
    raise AssertionError(f"No statistic named {name!r}; have {[r.name for r in metrics.evaluate()]}")


@given("a fresh set of default statistics")
def step_fresh_statistics(context):
    context.metrics = Metrics()


@when('I feed the values "{values}"')
def step_feed_values(context, values):
    context.metrics.aggregate(_values(values))


@then('statistic "{name}" should equal {expected}')
def step_statistic_equals(context, name, expected):
    actual = _result(context.metrics, name)
    if not math.isclose(actual, float(expected), rel_tol=1e-12, abs_tol=1e-12):
        raise AssertionError(f"{name}: expected {expected}, got {actual!r}")


@then('statistic "{name}" should be NaN')
def step_statistic_nan(context, name):
    actual = _result(context.metrics, name)
    if not math.isnan(actual):
        raise AssertionError(f"{name}: expected NaN, got {actual!r}")


@then("the statistics should be reported in the order {names}")
def step_statistics_order(context, names):
    expected = [n.strip() for n in names.split(",")]
    actual = [r.name for r in context.metrics.evaluate()]
    assert actual == expected, f"Order {actual} != {expected}"


@then("{count:d} samples should have been counted")
def step_samples_counted(context, count):
    assert context.metrics.samples == count, f"samples={context.metrics.samples}, expected {count}"


@then("evaluating every statistic twice should give identical results")
def step_eval_idempotent(context):
    for stat in context.metrics.statistics:
        first = stat.eval()
        second = stat.eval()
        same = (math.isnan(first) and math.isnan(second)) or first == second
        assert same, f"{stat.name()}: {first!r} then {second!r}"


@then('feeding "{other}" to a fresh set should give the same results')
def step_order_invariant(context, other):
    reordered = Metrics().aggregate(_values(other))
    for a, b in zip(context.metrics.evaluate(), reordered.evaluate()):
        assert a.name == b.name
        assert math.isclose(a.value, b.value, rel_tol=1e-12), f"{a.name}: {a.value!r} != {b.value!r}"


@then("a percentile of {p} should be rejected")
def step_percentile_rejected(context, p):
    try:
        Percentile(float(p))
    except ValueError:
        return
    raise AssertionError(f"Percentile({p}) was accepted")


@then('a percentile of {p} should be labelled "{label}"')
def step_percentile_label(context, p, label):
    assert Percentile(float(p)).name() == label


@then("a single {kind} accumulator fed {values} should evaluate to {expected}")
def step_single_accumulator(context, kind, values, expected):
    factories = {
        "min": Min,
        "max": Max,
        "mean": Mean,
        "median": lambda: Percentile(0.5),
    }
    stat = factories[kind]()
    for v in _values(values.strip('"')):
        stat.update(v)
    assert math.isclose(stat.eval(), float(expected), rel_tol=1e-12), f"{kind}: {stat.eval()!r}"
