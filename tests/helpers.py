SWIPE_IMAGES = [
    "https://img.example.com/a.jpg",
    "https://img.example.com/b.jpg",
    "https://img.example.com/c.jpg",
]


def registration_payload(username, **overrides):
    payload = {
        "profile_pic": "https://img.example.com/pic.jpg",
        "profile_name": f"{username.title()} Example",
        "username": username,
        "bio": "Hello there",
        "instagram_username": f"{username}_ig",
        "instagram_profile_link": f"https://instagram.com/{username}_ig",
        "country": "Portugal",
        "swipe_images": list(SWIPE_IMAGES),
        "password": "secret123",
    }
    payload.update(overrides)
    return payload


def auth_headers(token):
    return {"x-auth-token": token}
