import re

from core.identifiers import (
    generate_claim_token,
    generate_password,
    generate_referral_code,
    generate_slug,
    next_order_number,
    slugify_name,
)


def test_referral_code_shape():
    for _ in range(20):
        assert re.fullmatch(r"PRIYAS\d{1,2}", generate_referral_code("Priya Sharma"))
    assert re.fullmatch(r"AGENT\d{1,2}", generate_referral_code("123"))


def test_slug_is_cleaned_name_plus_suffix():
    assert slugify_name("  Dr. Anita  Rao ") == "dr-anita-rao"
    assert re.fullmatch(r"dr-anita-rao-[0-9a-z]{4}", generate_slug("Dr. Anita Rao"))
    assert re.fullmatch(r"card-[0-9a-z]{4}", generate_slug("!!!"))


def test_generated_secrets():
    assert len(generate_password()) == 12
    assert generate_claim_token() != generate_claim_token()


def test_order_numbers_start_at_1001_and_increase(db_session, make_order):
    assert next_order_number(db_session) == 1001
    make_order()
    make_order()
    assert next_order_number(db_session) == 1003
