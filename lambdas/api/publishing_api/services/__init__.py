"""Storage services for the Dashboard Publishing API."""
