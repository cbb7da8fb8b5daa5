"""Widgets, colour themes and the cell buffer they draw into."""