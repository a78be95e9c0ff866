import pytest

from covpass_helper.archive import AssetBundle
from covpass_helper.config import Settings
from covpass_helper.valuesets import ValueSets

from tests.claims import covid_test_body, recovery_body, vaccination_body, value_set_documents


@pytest.fixture
def value_sets():
    return ValueSets.from_documents(value_set_documents())


@pytest.fixture
def vaccination():
    return vaccination_body()


@pytest.fixture
def covid_test():
    return covid_test_body()


@pytest.fixture
def recovery():
    return recovery_body()


@pytest.fixture
def translate():
    """Identity translation so labels show their keys."""
    return lambda key: key


@pytest.fixture
def assets():
    return AssetBundle(icon=b"icon", icon2x=b"icon2x", logo=b"logo", logo2x=b"logo2x")


@pytest.fixture
def settings():
    return Settings(
        pass_type_identifier="pass.com.example.covid",
        team_identifier="ABCDE12345",
        value_sets_url="https://valuesets.example.com",
        signer_url="https://signer.example.com",
    )


