from tests.fixtures.dialogflow_fixtures import v1_client, v2_client  # noqa: F401
