"""Test harness setup."""

from hypothesis import HealthCheck, settings

# Hypothesis's first run in a clean tree builds its local caches during input
# generation, which can trip the too_slow health check on whichever test runs
# first. Generation speed is not what these tests check.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
