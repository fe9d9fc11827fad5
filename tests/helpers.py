PASSWORD = "s3cret-pass"


async def login(client, email, password=PASSWORD):
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
