from utils.object_id import is_valid_object_id, all_valid_object_ids


def test_is_valid_object_id():
    assert is_valid_object_id("507f1f77bcf86cd799439011") is True
    assert is_valid_object_id("507f1f77bcf86cd79943901") is False
    assert is_valid_object_id("zzzzzzzzzzzzzzzzzzzzzzzz") is False
    assert is_valid_object_id("not-an-id") is False


def test_all_valid_object_ids():
    good = "507f1f77bcf86cd799439011"
    assert all_valid_object_ids(good, good) is True
    assert all_valid_object_ids(good, "123") is False
