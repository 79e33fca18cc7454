import os
import platform

from hypothesis import settings, HealthCheck


# the codec tests are cheap, so run more examples than the default
settings.register_profile(
    "id3edit",
    max_examples=settings.default.max_examples * 2,
    suppress_health_check=[HealthCheck.too_slow])

if "CI" in os.environ:
    # CI can be slow, so be patient
    max_examples = settings.default.max_examples * 5
    if platform.python_implementation() == "PyPy":
        # PyPy is too slow
        max_examples = settings.default.max_examples

    settings.register_profile(
        "ci",
        deadline=settings.default.deadline * 10,
        max_examples=max_examples)
    settings.load_profile("ci")
else:
    settings.load_profile("id3edit")
