def _payload(**overrides):
    payload = {
        "name": "John Smith",
        "email": "john@example.com",
        "password": "password123",
        "employeeId": "EMP002",
        "position": "UI Designer",
        "phone": "555-5678",
    }
    payload.update(overrides)
    return payload


def test_create_employee_hides_password(client):
    response = client.post("/api/employees", json=_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "john@example.com"
    assert data["employeeId"] == "EMP002"
    assert data["notifications"] == 0
    assert "password" not in data
    assert "hashed_password" not in data


def test_create_employee_rejects_duplicates(client, employee):
    duplicate_email = client.post("/api/employees", json=_payload(email="SARAH@example.com"))
    duplicate_code = client.post("/api/employees", json=_payload(employeeId="EMP001"))

    assert duplicate_email.status_code == 400
    assert duplicate_email.json()["detail"] == "Employee with this email already exists"
    assert duplicate_code.status_code == 400
    assert duplicate_code.json()["detail"] == "Employee with this employee ID already exists"


def test_create_employee_validates_fields(client):
    assert client.post("/api/employees", json=_payload(password="short")).status_code == 400
    assert client.post("/api/employees", json=_payload(email="not-an-email")).status_code == 400


def test_get_and_update_employee(client, employee):
    fetched = client.get(f"/api/employees/{employee.id}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Sarah Johnson"

    updated = client.put(f"/api/employees/{employee.id}", json={"position": "Tech Lead", "phone": None})
    assert updated.status_code == 200
    assert updated.json()["position"] == "Tech Lead"
    assert updated.json()["phone"] is None
    assert updated.json()["email"] == "sarah@example.com"

    assert client.get("/api/employees/999").status_code == 404


def test_password_change_takes_effect_on_login(client, employee):
    client.put(f"/api/employees/{employee.id}", json={"password": "new-secret"})

    old = client.post("/api/auth/login", json={"email": "sarah@example.com", "password": "password123"})
    new = client.post("/api/auth/login", json={"email": "sarah@example.com", "password": "new-secret"})

    assert old.status_code == 401
    assert new.status_code == 200


def test_login_me_and_logout(client, employee):
    login = client.post("/api/auth/login", json={"email": "Sarah@Example.com", "password": "password123"})
    assert login.status_code == 200
    assert login.json()["id"] == employee.id
    assert "password" not in login.json()

    wrong = client.post("/api/auth/login", json={"email": "sarah@example.com", "password": "wrong-pass"})
    assert wrong.status_code == 401
    assert wrong.json()["detail"] == "Invalid email or password"

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["employeeId"] == "EMP001"

    logout = client.post("/api/auth/logout")
    assert logout.json() == {"message": "Logged out successfully"}


def test_me_without_employee_is_unauthenticated(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_blank_employee_text_fields_are_rejected(client, employee):
    assert client.post("/api/employees", json=_payload(name="  ")).status_code == 400
    assert client.post("/api/employees", json=_payload(position=" ")).status_code == 400
    assert client.put(f"/api/employees/{employee.id}", json={"name": "   "}).status_code == 400
    assert client.put(f"/api/employees/{employee.id}", json={"position": "  "}).status_code == 400

    assert client.get(f"/api/employees/{employee.id}").json()["name"] == "Sarah Johnson"


def test_employee_text_fields_are_trimmed(client):
    response = client.post("/api/employees", json=_payload(name="  John Smith  ", employeeId=" EMP002 "))

    assert response.status_code == 201
    assert response.json()["name"] == "John Smith"
    assert response.json()["employeeId"] == "EMP002"
