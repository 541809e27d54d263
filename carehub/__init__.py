"""carehub - residential-care facility management service."""
