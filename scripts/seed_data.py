#!/usr/bin/env python3
"""
Seed script: creates demo users and pet posts via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 5 --posts-per-user 10
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8080"

PET_NAMES = [
    "Luna", "Milo", "Bella", "Simba", "Oscar", "Nala", "Charlie", "Coco",
    "Max", "Kitty", "Rocky", "Mimi", "Buddy", "Loki", "Daisy", "Tiger",
]

SPECIES_BREEDS = {
    "cat": ["Maine Coon", "Siamese", "Norwegian Forest", "British Shorthair", "Mixed"],
    "dog": ["Labrador", "Beagle", "Border Collie", "Dachshund", "Mixed"],
    "rabbit": ["Lionhead", "Dutch", "Mixed"],
}

LOCATIONS = [
    "Södermalm, Stockholm", "Kungsholmen, Stockholm", "Vasastan, Stockholm",
    "Majorna, Göteborg", "Möllevången, Malmö", "Fyrislund, Uppsala",
]

DESCRIPTIONS = [
    "Very friendly, answers to its name.",
    "Shy with strangers, please do not chase.",
    "Wearing a red collar with a bell.",
    "Microchipped. Last seen near the park.",
    "Has a white patch on the chest.",
]


def random_post(username: str) -> dict:
    species = random.choice(list(SPECIES_BREEDS))
    return {
        "status": random.choice(["lost", "found"]),
        "petName": random.choice(PET_NAMES),
        "species": species,
        "sex": random.choice(["female", "male", "unknown"]),
        "breed": random.choice(SPECIES_BREEDS[species]),
        "location": random.choice(LOCATIONS),
        "description": random.choice(DESCRIPTIONS),
        "email": f"{username}@example.com",
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users and pet posts via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--posts-per-user", type=int, default=8, help="Pet posts per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    tokens: dict[str, str] = {}
    created_posts = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        # 1) Register users, or log in when they already exist
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            creds = {"username": f"seeduser{i+1}", "password": "password123"}
            try:
                r = client.post("/register-user", json=creds)
                if r.status_code == 400:
                    r = client.post("/authenticate-user", json=creds)
                if r.status_code == 200:
                    tokens[creds["username"]] = r.json()["accessToken"]
                else:
                    errors.append(f"User {creds['username']}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"User {creds['username']}: {e}")

        # 2) Create pet posts per user
        print(f"Creating ~{len(tokens) * args.posts_per_user} pet posts...")
        for username, token in tokens.items():
            headers = {"Authorization": token}
            for _ in range(args.posts_per_user):
                try:
                    r = client.post("/petposts", headers=headers, json=random_post(username))
                    if r.status_code in (200, 201):
                        created_posts += 1
                    else:
                        errors.append(f"Post {username}: {r.status_code}")
                except httpx.HTTPError as e:
                    errors.append(str(e))
            print(f"  User {username}: total posts so far: {created_posts}")

    print(f"\nDone. Users: {len(tokens)}, Pet posts created: {created_posts}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
