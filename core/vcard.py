# vCard 3.0 export for the "Save Contact" action on public profiles

from schemas.profiles import PublicProfile


def _escape(value: str) -> str:
    return value.replace("\r\n", "\n").replace("\n", "\\n")


def generate_vcard(profile: PublicProfile) -> str:
    """Build vCard text; optional fields that are empty are left out entirely."""
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"FN:{profile.full_name}",
        f"ORG:{profile.company_name}" if profile.company_name else "",
        f"TITLE:{profile.job_title}" if profile.job_title else "",
        f"TEL;TYPE=CELL:{profile.phone}" if profile.phone else "",
        f"EMAIL:{profile.email}" if profile.email else "",
        f"URL:{profile.website}" if profile.website else "",
        f"X-SOCIALPROFILE;TYPE=linkedin:{profile.linked_in}" if profile.linked_in else "",
        f"X-SOCIALPROFILE;TYPE=instagram:{profile.instagram}" if profile.instagram else "",
        f"X-SOCIALPROFILE;TYPE=twitter:{profile.twitter}" if profile.twitter else "",
        f"NOTE:{_escape(profile.bio)}" if profile.bio else "",
        "END:VCARD",
    ]
    return "\n".join(line for line in lines if line)


def vcard_filename(profile: PublicProfile) -> str:
    return "_".join(profile.full_name.split()) + ".vcf"
