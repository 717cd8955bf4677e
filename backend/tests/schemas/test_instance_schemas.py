"""Instance Schemas — boundary validation of instance requests."""

import pytest
from pydantic import ValidationError

from instance_api.schemas.instance import (
    InstanceAccess, InstanceCreate, InstanceData, InstanceSave,
)


def test_create_accepts_empty_strings():
    body = InstanceCreate(password="", content="")
    assert body.password == "" and body.content == ""


def test_create_keeps_whitespace():
    assert InstanceCreate(password=" pw ", content="  x\n").content == "  x\n"


def test_access_coerces_numeric_id():
    assert InstanceAccess(id=482913, password="pw").id == "482913"


@pytest.mark.parametrize("bad_id", ["", "abc", "12a", "1" * 17, "-1", True])
def test_access_rejects_bad_ids(bad_id):
    with pytest.raises(ValidationError):
        InstanceAccess(id=bad_id, password="pw")


def test_save_requires_content():
    with pytest.raises(ValidationError):
        InstanceSave(id="1", password="pw")


def test_data_content_optional():
    assert InstanceData(id="1").content is None
