from commitvalidator.models import ChangedFile
from commitvalidator.validation import PRValidator, validate_pr


def files(*names):
    return [ChangedFile(filename=name) for name in names]


def test_forbidden_file_fails():
    assert validate_pr(files("forbidden.txt", "ok.txt")) is False


def test_clean_files_return_default():
    assert validate_pr(files("ok.txt")) is True
    assert validate_pr(files("ok.txt"), default=False) is False


def test_match_is_exact():
    # only exact filenames are forbidden, not paths or case variants
    assert validate_pr(files("docs/forbidden.txt", "Forbidden.txt", "forbidden.txt.bak")) is True


def test_empty_file_list():
    assert validate_pr([]) is True


def test_custom_forbidden_names():
    assert validate_pr(files("secrets.env"), forbidden_names={"secrets.env"}) is False
    assert validate_pr(files("forbidden.txt"), forbidden_names={"secrets.env"}) is True


def test_validator_reports_offending_files():
    validator = PRValidator(forbidden_names=["forbidden.txt", "secrets.env"])

    result = validator.validate(files("a.py", "secrets.env", "forbidden.txt"))

    assert result.passed is False
    assert result.state == "failure"
    assert result.forbidden_files == ["secrets.env", "forbidden.txt"]


def test_validator_default_outcome():
    assert PRValidator().validate(files("ok.txt")).passed is True

    result = PRValidator(default_outcome=False).validate(files("ok.txt"))
    assert result.passed is False
    assert result.forbidden_files == []
