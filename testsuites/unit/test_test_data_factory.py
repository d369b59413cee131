import re
import string

from testsuites.ui_testing.framework.test_data_factory import TestDataGenerator, TestUser


def test_unique_emails_do_not_collide():
    data = TestDataGenerator()

    emails = [data.unique_email() for _ in range(10_000)]

    assert len(set(emails)) == len(emails)
    assert all(re.fullmatch(r"test-[0-9a-f]{12}@example\.com", email) for email in emails)


def test_unique_email_with_domain_accepts_leading_at():
    data = TestDataGenerator()

    assert data.unique_email_with_domain("@university.edu").endswith("@university.edu")
    assert data.unique_email_with_domain("test.de").endswith("@test.de")


def test_strong_password_has_every_character_class():
    data = TestDataGenerator()

    for _ in range(100):
        password = data.strong_password()
        assert len(password) == 12
        assert any(c in string.ascii_uppercase for c in password)
        assert any(c in string.ascii_lowercase for c in password)
        assert any(c in string.digits for c in password)
        assert any(c in "!@#$%^&*" for c in password)


def test_seed_makes_passwords_reproducible():
    assert TestDataGenerator(seed=7).strong_password() == TestDataGenerator(seed=7).strong_password()


def test_negative_inputs():
    data = TestDataGenerator()

    assert data.weak_password() == "123"
    assert data.invalid_email() == "invalid-email"
    assert "@" not in data.invalid_email()
    assert "@" in data.known_duplicate_email()


def test_real_user_uses_configured_prefix_and_domain():
    data = TestDataGenerator(email_domain="@qa.example.org", email_prefix="signup.bot")

    account = data.real_user()
    work = data.real_user("work")

    assert re.fullmatch(r"signup\.bot\+[0-9a-f]{12}@qa\.example\.org", account.email)
    assert account.type == "real-account"
    assert work.email.startswith("signup.bot+work+")
    assert work.type == "real-work"


def test_typed_users_and_password_stays_out_of_str():
    data = TestDataGenerator()

    work = data.work_user()
    personal = data.personal_user()

    assert work.email.endswith("@company.com") and work.type == "work"
    assert personal.email.endswith("@gmail.com") and personal.type == "personal"
    assert work.password not in str(work)
    assert isinstance(work, TestUser)
