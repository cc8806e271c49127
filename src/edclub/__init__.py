"""EDClub API: agenda, attendance, badges, weekly ranking and feed for a class cohort."""
