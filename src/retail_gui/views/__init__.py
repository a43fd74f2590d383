"""Qt views: data table, section pages and the main window shell."""
