"""Front-ends that drive a GameSession: a headless console and an Arcade window."""
