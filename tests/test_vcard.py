from core.vcard import generate_vcard, vcard_filename
from schemas.profiles import PublicProfile


def test_minimal_profile_has_no_blank_lines():
    profile = PublicProfile(full_name="Jane Doe", phone="+919876543210", email="jane@example.com")

    lines = generate_vcard(profile).split("\n")

    assert lines[0] == "BEGIN:VCARD"
    assert lines[1] == "VERSION:3.0"
    assert lines[-1] == "END:VCARD"
    assert "" not in lines
    assert [l for l in lines if l.startswith("FN:")] == ["FN:Jane Doe"]
    assert [l for l in lines if l.startswith("TEL")] == ["TEL;TYPE=CELL:+919876543210"]
    assert [l for l in lines if l.startswith("EMAIL")] == ["EMAIL:jane@example.com"]
    assert not any(l.startswith(("ORG", "TITLE", "URL", "NOTE")) for l in lines)


def test_full_profile_includes_socials_and_escaped_note():
    profile = PublicProfile(
        full_name="Arjun Mehta",
        company_name="Mehta Realty",
        job_title="Founder",
        website="https://mehta.example",
        linked_in="https://linkedin.com/in/arjun",
        bio="Homes in Pune.\nCall anytime.",
    )

    text = generate_vcard(profile)

    assert "ORG:Mehta Realty" in text
    assert "TITLE:Founder" in text
    assert "X-SOCIALPROFILE;TYPE=linkedin:https://linkedin.com/in/arjun" in text
    assert "NOTE:Homes in Pune.\\nCall anytime." in text


def test_filename_joins_name_parts():
    assert vcard_filename(PublicProfile(full_name="Jane  Q Doe")) == "Jane_Q_Doe.vcf"
