"""Reading JWT claims, such as the account ID, from request metadata."""