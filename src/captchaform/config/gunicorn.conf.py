def on_starting(server):
    server.log.info("Starting captchaform with %s workers", workers)

bind = "0.0.0.0:5000"
workers = 3
worker_class = "sync"
# Covers the bounded reCAPTCHA call (RECAPTCHA_TIMEOUT) with room to spare
timeout = 30
