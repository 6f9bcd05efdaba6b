"""Foundation: errors, configuration and time sources shared by the runtime."""
