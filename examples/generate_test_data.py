import csv
import os
import random

if not os.path.exists("data"):
    os.mkdir("data")

if not os.path.exists("data/predictions.csv"):
    # Match predictions, one row per match, in the shape
    # of the publicly available soccer predictions datasets.
    teams = {
        "Arsenal": 82.1,
        "Chelsea": 79.4,
        "Liverpool": 88.7,
        "Manchester City": 91.3,
        "Tottenham": 76.8,
        "Everton": 68.2,
        "Leicester City": 70.5,
        "Aston Villa": 71.9,
    }
    matches = []
    for season in (2019, 2020, 2021, 2022):
        for team1, spi1 in teams.items():
            for team2, spi2 in teams.items():
                if team1 == team2:
                    continue
                spi1_season = round(spi1 + random.uniform(-3, 3), 2)
                spi2_season = round(spi2 + random.uniform(-3, 3), 2)
                strength = spi1_season / (spi1_season + spi2_season)
                prob1 = round(strength * 0.75, 4)
                prob2 = round((1 - strength) * 0.75, 4)
                probtie = round(1 - prob1 - prob2, 4)
                score1 = max(0, int(random.gauss(strength * 3, 1.2)))
                score2 = max(0, int(random.gauss((1 - strength) * 3, 1.2)))
                matches.append(
                    [season, team1, team2, spi1_season, spi2_season, prob1, prob2, probtie, score1, score2]
                )

    with open("data/predictions.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["season", "team1", "team2", "spi1", "spi2", "prob1", "prob2", "probtie", "score1", "score2"]
        )
        writer.writerows(matches)
