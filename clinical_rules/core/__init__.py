"""Core engines: trigger rules, referral checklist, range validation and catalog loading."""
