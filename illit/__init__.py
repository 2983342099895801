"""illit - CLI dla konwersji rozdziałów .rs do Markdown."""
