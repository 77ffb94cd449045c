from dataclasses import dataclass


@dataclass
class User:
    id: int
    firstname: str
    lastname: str
    email: str
    city: str
    language: str
