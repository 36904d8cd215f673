"""text_crawler.parser: разбор HTML и извлечение видимого текста."""
