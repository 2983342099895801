"""Komendy CLI illit; każdy moduł udostępnia add_parser() i run()."""
