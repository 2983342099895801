"""
book - współpracownicy silnika: preprocesor mdBook i wsadowa konwersja plików.

Moduły:
  preprocessor - protokół mdBook ([context, book] na stdin, książka na stdout)
  files        - wybór plików po rozszerzeniu, konwersja w puli wątków
"""
