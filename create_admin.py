import sys
from gtraf_admin.core.security import hash_password, MIN_PASSWORD_LENGTH
from gtraf_admin.schemas.reservation import EMAIL_PATTERN


def admin_env_lines(email: str, password: str) -> list:
    return [
        f"ADMIN_EMAIL={email}",
        f"ADMIN_PASSWORD_HASH='{hash_password(password)}'",
    ]


def main():
    if len(sys.argv) < 3:
        print("Usage: python create_admin.py <email> <password>")
        sys.exit(1)

    email = sys.argv[1].strip()
    password = sys.argv[2]

    if not EMAIL_PATTERN.match(email):
        print("Error: invalid email")
        sys.exit(1)

    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Error: password must be at least {MIN_PASSWORD_LENGTH} characters")
        sys.exit(1)

    print("# Add these lines to .env to enable the local admin account")
    for line in admin_env_lines(email, password):
        print(line)
    sys.exit(0)


if __name__ == "__main__":
    main()
