"""Terminal front end for EDClub: views, forms and the `edclub` command."""
