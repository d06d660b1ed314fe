import asyncio
import os

import pyttsx3
import speech_recognition as sr

from companion.client import CompanionClient, Reply
from companion.speech import SPEECH_CODES, crisis_notice, voice_turn


class MicrophoneRecognizer:
    def __init__(self, locale: str = "en") -> None:
        self.language = SPEECH_CODES.get(locale, "en-US")
        self.recognizer = sr.Recognizer()
        self.mic = None

    def start(self) -> None:
        self.mic = sr.Microphone()

    def stop(self) -> None:
        self.mic = None

    def listen(self) -> str:
        if self.mic is None:
            return ""
        with self.mic as source:
            self.recognizer.adjust_for_ambient_noise(source, duration=0.5)
            audio = self.recognizer.listen(source, phrase_time_limit=6)
        try:
            return self.recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError:
            return ""
        except sr.RequestError:
            return ""


class TtsSpeaker:
    def __init__(self) -> None:
        self.engine = pyttsx3.init()
        self.engine.setProperty("rate", 155)
        self.engine.setProperty("volume", 0.9)

    def say(self, text: str) -> None:
        self.engine.say(text)
        self.engine.runAndWait()


def show_crisis(reply: Reply) -> None:
    print(crisis_notice(os.getenv("COMPANION_COUNTRY")))


async def run_loop() -> None:
    locale = os.getenv("COMPANION_LOCALE", "en")
    recognizer = MicrophoneRecognizer(locale)
    try:
        recognizer.start()
    except (OSError, AttributeError):
        print("Microphone not available.")
        return
    speaker = TtsSpeaker()

    print("Voice companion: speak after 'Listening...'. Press Ctrl+C to stop.")
    async with CompanionClient(os.getenv("COMPANION_URL", "http://localhost:8000"), locale=locale) as client:
        try:
            while True:
                print("Listening...")
                reply = await voice_turn(recognizer, client, speaker, on_crisis=show_crisis)
                if reply is not None:
                    print(f"Emotion={reply.emotion} | {reply.content}")
                await asyncio.sleep(0.2)
        finally:
            recognizer.stop()


if __name__ == "__main__":
    try:
        asyncio.run(run_loop())
    except KeyboardInterrupt:
        print("\nStopping.")
