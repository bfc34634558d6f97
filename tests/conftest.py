import pytest

SAMPLE_SPEC = """#F /tmp/sample.spec
#E 1700000000
#D Mon Jan 01 00:00:00 2024
#C sample  User = tester
#O0 Two Theta  Theta  Chi
#O1 Phi  Sample X
#o0 tth th chi
#o1 phi samx
#J0 Seconds  Monitor  Detector
#j0 sec mon det

#S 1 ascan  th 0 1 2 0.1
#D Mon Jan 01 00:01:00 2024
#P0 10 5 0
#P1 1.5 -2
#N 3
#L Theta  Monitor  Detector
0 1000 12
0.5 1001 30
1 999 15

#S 2 timescan 1
#L Seconds  Detector
1 5
2 6
"""


class Reporter:
    """Collects what a reader reports instead of logging it."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, msg):
        self.errors.append(msg)

    def warning(self, msg):
        self.warnings.append(msg)


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def sample_spec():
    return SAMPLE_SPEC
