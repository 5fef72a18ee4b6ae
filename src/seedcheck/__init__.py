"""seedcheck — seedable random generator with a statistical self-test battery."""

__version__ = "0.2.0"

from seedcheck.config.defaults import full_battery as full_battery
from seedcheck.config.defaults import quick_battery as quick_battery
from seedcheck.config.schema import BatteryConfig as BatteryConfig
from seedcheck.config.schema import LoggingConfig as LoggingConfig
from seedcheck.core.generator import Random as Random
from seedcheck.utils.exceptions import ConfigError as ConfigError
from seedcheck.utils.exceptions import PreconditionViolation as PreconditionViolation
from seedcheck.utils.exceptions import SeedcheckError as SeedcheckError
from seedcheck.validation.report import CheckFailure as CheckFailure
from seedcheck.validation.report import CheckReport as CheckReport
from seedcheck.validation.report import FailureKind as FailureKind
from seedcheck.validation.tester import RandomTester as RandomTester
