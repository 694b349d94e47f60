from reviewpad.report import error


def test_error():
    want = "Error occurred! Details:\nThere is something wrong with testing"
    assert error("There is something wrong with %v", "testing") == want


def test_error_without_arguments():
    assert error("plain") == "Error occurred! Details:\nplain"