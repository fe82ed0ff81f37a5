"""BDD tests for order tracking."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_tracking.feature")


@when(parsers.cfparse('the order moves to "{status}" at "{location}"'))
def move_order(order, status, location, error):
    try:
        order.change_delivery_status(status, location=location)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the tracking progress is {progress:d}%"))
def tracking_progress_is(order, progress):
    assert order.progress() == progress


@then(parsers.cfparse("the timeline has {count:d} entries"))
def timeline_has_entries(order, count):
    assert len(order.timeline()) == count


@then("the order is delivered")
def order_is_delivered(order):
    assert order.is_delivered()
