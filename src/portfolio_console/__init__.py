"""Portfolio console: browse a personal portfolio's content API from the terminal."""
